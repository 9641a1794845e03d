"""
File-backed property store.

Keeps all properties in a single JSON object on disk. Every call reads the
file, and every write replaces it atomically, so several processes can
share one file as long as they do not write at the same instant.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from .types import PropertyStore, StorageError


logger = logging.getLogger(__name__)


class FilePropertyStore(PropertyStore):
    """Durable property store persisted to a JSON file."""

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize file property store.

        Args:
            file_path: Path of the JSON file; created on first write
        """
        self.file_path = Path(file_path)
        logger.info(f"Using property file {self.file_path}")

    def get(self, key: str) -> Optional[str]:
        return self._load("get", key).get(key)

    def set(self, key: str, value: str) -> None:
        properties = self._load("set", key)
        properties[key] = value
        self._save("set", key, properties)

    def delete(self, key: str) -> None:
        properties = self._load("delete", key)
        if key not in properties:
            return
        del properties[key]
        self._save("delete", key, properties)

    def list_keys(self) -> List[str]:
        return list(self._load("list_keys"))

    def _load(self, operation: str, key: str = "") -> Dict[str, str]:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.error(f"Failed to read {self.file_path}: {e}")
            raise StorageError(operation, key, f"Failed to read {self.file_path}", e)
        except ValueError as e:
            raise StorageError(operation, key, f"Corrupt property file {self.file_path}", e)

        if not isinstance(data, dict):
            raise StorageError(operation, key, f"Property file {self.file_path} is not a JSON object")
        return data

    def _save(self, operation: str, key: str, properties: Dict[str, str]) -> None:
        directory = self.file_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".props-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(properties, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write {self.file_path}: {e}")
            raise StorageError(operation, key, f"Failed to write {self.file_path}", e)
