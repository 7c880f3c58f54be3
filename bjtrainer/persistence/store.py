"""Key-value stores backing the persisted trainer records."""

import logging
from abc import ABC, abstractmethod

import redis

from config import StorageConfig

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A store backend failed to read or write."""


class KeyValueStore(ABC):
    """Abstract synchronous string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get the value for a key, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set the value for a key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a key (absent keys are ignored)."""
        ...


class InMemoryStore(KeyValueStore):
    """In-memory store for tests and throwaway sessions."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisStore(KeyValueStore):
    """Redis-backed store."""

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(key)
        except redis.RedisError as exc:
            raise StorageError(f"Failed to read {key}") from exc
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise StorageError(f"Undecodable value for {key}") from exc
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
        except redis.RedisError as exc:
            raise StorageError(f"Failed to write {key}") from exc

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except redis.RedisError as exc:
            raise StorageError(f"Failed to delete {key}") from exc


def open_store(storage: StorageConfig) -> KeyValueStore:
    """Create the store selected by configuration."""
    if storage.backend == "redis":
        logger.debug("Using Redis store at %s:%s", storage.redis.host, storage.redis.port)
        return RedisStore.from_url(storage.redis.url)
    return InMemoryStore()
