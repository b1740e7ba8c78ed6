"""Key-value storage backends."""

from .kv import (
    InMemoryKeyValueBackend,
    KeyValueBackend,
    RedisKeyValueBackend,
    SafeKeyValueStore,
    build_kv_store,
)

__all__ = [
    "InMemoryKeyValueBackend",
    "KeyValueBackend",
    "RedisKeyValueBackend",
    "SafeKeyValueStore",
    "build_kv_store",
]
