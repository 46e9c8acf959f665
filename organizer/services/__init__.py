"""Services for the application."""

from .storage import StorageAdapter, MemoryStorage, JsonFileStorage
from .store import ActivityStore
from .data_processor import DataProcessor

__all__ = ["StorageAdapter", "MemoryStorage", "JsonFileStorage", "ActivityStore", "DataProcessor"]
