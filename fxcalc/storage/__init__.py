"""Persistent key-value storage for preferences, history and cached rates."""

from .store import KeyValueStore, MemoryStore, SqlStore
from .preferences import PreferenceStore

__all__ = ["KeyValueStore", "MemoryStore", "SqlStore", "PreferenceStore"]
