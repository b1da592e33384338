"""命名空间键值存储."""

from rin.storage.base import (
    CACHE_NAMESPACE,
    CLIENT_CONFIG_NAMESPACE,
    SERVER_CONFIG_NAMESPACE,
    KeyValueStore,
)
from rin.storage.database import DatabaseStore
from rin.storage.memory import MemoryStore

__all__ = [
    "CACHE_NAMESPACE",
    "CLIENT_CONFIG_NAMESPACE",
    "SERVER_CONFIG_NAMESPACE",
    "DatabaseStore",
    "KeyValueStore",
    "MemoryStore",
]
