"""Storage adapters persisting the studio collections."""

from .base import COLLECTIONS, StorageAdapter
from .factory import create_adapter, resolve_backend
from .filesystem import FileStorageAdapter
from .memory import MemoryStorageAdapter
from .redis_kv import RedisStorageAdapter

__all__ = [
    "COLLECTIONS",
    "StorageAdapter",
    "create_adapter",
    "resolve_backend",
    "FileStorageAdapter",
    "MemoryStorageAdapter",
    "RedisStorageAdapter",
]
