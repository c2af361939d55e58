from .json_store import BirthdayStore, JsonFileStore, StoreError

__all__ = [
    "BirthdayStore",
    "JsonFileStore",
    "StoreError",
]
