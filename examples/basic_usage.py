"""
Basic oauthstore usage example.

This example demonstrates the fundamental storage operations:
- Creating storage for an OAuth2 service
- Storing and reading a token
- Surviving a process restart through the durable tier
- Resetting a service
"""

import tempfile
from pathlib import Path

from oauthstore import (
    FilePropertyStore,
    MemorySharedCache,
    ServiceStorage,
    get_service_names,
)


def basic_example():
    """Demonstrate basic oauthstore usage"""
    print("Basic oauthstore Example")
    print("=" * 30)

    with tempfile.TemporaryDirectory() as tmp:
        properties = FilePropertyStore(Path(tmp) / "properties.json")
        cache = MemorySharedCache()

        # 1. Create storage for two services sharing the same tiers
        drive = ServiceStorage.for_service("drive", properties, cache)
        gmail = ServiceStorage.for_service("gmail", properties, cache)
        print("✓ Created service storage for drive and gmail")

        # 2. Store tokens
        drive.save_token({"access_token": "drive-token", "expires_in": 3600})
        gmail.save_token({"access_token": "gmail-token", "expires_in": 3600})
        print(f"✓ Drive token: {drive.get_token()}")

        # 3. A new process only has the durable tier and the shared cache
        restarted = ServiceStorage.for_service("drive", properties, cache)
        print(f"✓ Token after restart: {restarted.get_token()}")
        print(f"✓ Services with stored state: {get_service_names(properties)}")

        # 4. Reset one service
        drive.reset()
        print(f"✓ Drive has token after reset: {drive.has_token()}")
        print(f"✓ Gmail has token after reset: {gmail.has_token()}")


if __name__ == "__main__":
    basic_example()
