"""User-data storage backends for the persisted cache snapshot."""

from .storage_base import UserDataStore
from .storage_memory import InMemoryUserDataStore
from .storage_sql import SqlUserDataStore

__all__ = ["InMemoryUserDataStore", "SqlUserDataStore", "UserDataStore"]
