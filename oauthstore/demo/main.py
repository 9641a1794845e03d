"""
oauthstore Demo Application

Walks through the layered storage: writes, reads served by each tier,
negative caching and namespace reset. Tiers come from the default
configuration, an optional config file and OAUTHSTORE_* variables.
"""

import argparse
import logging
import sys
from typing import List, Optional

from oauthstore.backends.factory import StorageConfig, load_storage_config
from oauthstore.backends.types import StorageError
from oauthstore.service.oauth2 import STORAGE_PREFIX, create_storage_from_config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Demonstrate oauthstore layered storage")
    parser.add_argument("--config", help="JSON or YAML storage configuration file")
    parser.add_argument("--service", default="demo", help="OAuth2 service name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("oauthstore Demo")
    print("=" * 50)
    print()

    try:
        config = load_storage_config(args.config) if args.config else StorageConfig(cache="memory")
        storage = create_storage_from_config(STORAGE_PREFIX + args.service, config)
    except (ValueError, OSError) as e:
        print(f"✗ Could not create storage: {e}")
        return 1

    print("✓ Created storage")
    print(f"  - Namespace: {storage.prefix}")
    print(f"  - Property store: {config.property_store}")
    print(f"  - Shared cache: {config.cache}")
    print(f"  - Cache TTL: {config.ttl_seconds()}s")
    print()

    try:
        print("Step 1: Write and read back")
        print("-" * 40)
        token = {"access_token": "demo-access-token", "expires_in": 3600}
        storage.set_value(None, token)
        print(f"✓ Stored token under {storage.get_prefixed_key()}")
        print(f"  - Read back: {storage.get_value()}")
        print()

        print("Step 2: Negative caching")
        print("-" * 40)
        missing = storage.get_value("refresh_token")
        cached = storage.local_cache.get(storage.get_prefixed_key("refresh_token"))
        print(f"✓ Missing key read as {missing}, cached locally as {cached!r}")
        print()

        print("Step 3: Read-through after a restart")
        print("-" * 40)
        storage.local_cache.clear()
        print(f"✓ Local tier cleared, token is still {storage.get_value()}")
        print()

        print("Step 4: Reset")
        print("-" * 40)
        storage.set_value("code_verifier", "demo-verifier")
        storage.reset()
        print(f"✓ After reset: token={storage.get_value()}, "
              f"code_verifier={storage.get_value('code_verifier')}")
        print()

    except StorageError as e:
        print(f"✗ Storage operation failed: {e}")
        return 1

    print("Demo completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
