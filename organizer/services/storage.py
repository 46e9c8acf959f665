"""Key-value persistence adapters for the activity collection."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union
from organizer.errors import PersistenceReadError

logger = logging.getLogger(__name__)

STORAGE_KEY = "dailyActivities"


def _decode_records(raw: Any) -> list[dict]:
    """Check the stored value is a list of JSON objects."""
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise PersistenceReadError("Stored activities are not a list of records")
    return raw


class StorageAdapter(ABC):
    """Saves and loads the serialized activity collection under one key."""

    def __init__(self, key: str = STORAGE_KEY):
        self.key = key

    @abstractmethod
    def save(self, records: list[dict]) -> None:
        """Replace the stored collection with `records`."""

    @abstractmethod
    def load(self) -> list[dict]:
        """
        Return the stored collection.

        Returns:
            List of records, empty if nothing is stored

        Raises:
            PersistenceReadError: If stored content is unreadable or corrupt
        """


class MemoryStorage(StorageAdapter):
    """In-process storage holding the JSON text in a dict slot."""

    def __init__(self, key: str = STORAGE_KEY, slots: Optional[dict[str, str]] = None):
        super().__init__(key)
        self.slots: dict[str, str] = slots if slots is not None else {}

    def save(self, records: list[dict]) -> None:
        self.slots[self.key] = json.dumps(records)

    def load(self) -> list[dict]:
        stored = self.slots.get(self.key)
        if not stored:
            return []
        try:
            raw = json.loads(stored)
        except ValueError as e:
            raise PersistenceReadError(f"Invalid JSON in storage slot {self.key}: {e}")
        return _decode_records(raw)


class JsonFileStorage(StorageAdapter):
    """
    Storage backed by one JSON document on disk.

    The document is an object mapping the storage key to the record array.
    Writes go through a temporary file and `os.replace`, so a reader sees
    either the old or the new collection.
    """

    def __init__(self, path: Union[str, Path], key: str = STORAGE_KEY):
        super().__init__(key)
        self.path = Path(path)

    def _read_document(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"Cannot read {self.path}: {e}")

        if not text.strip():
            return {}

        try:
            document = json.loads(text)
        except ValueError as e:
            raise PersistenceReadError(f"Invalid JSON in {self.path}: {e}")

        if not isinstance(document, dict):
            raise PersistenceReadError(f"Unexpected document type in {self.path}")
        return document

    def save(self, records: list[dict]) -> None:
        # Keep other keys written by someone else into the same file
        try:
            document = self._read_document()
        except PersistenceReadError:
            document = {}
        document[self.key] = records

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(records)} activities to {self.path}")

    def load(self) -> list[dict]:
        document = self._read_document()
        if self.key not in document or document[self.key] is None:
            return []
        return _decode_records(document[self.key])
