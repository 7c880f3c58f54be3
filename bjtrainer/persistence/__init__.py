"""Persistence of settings, statistics and bankroll."""

from bjtrainer.persistence.records import (
    DEFAULT_BANKROLL,
    CountingSystemName,
    SettingsRecord,
    StatsRecord,
)
from bjtrainer.persistence.repository import TrainerRepository
from bjtrainer.persistence.store import (
    InMemoryStore,
    KeyValueStore,
    RedisStore,
    StorageError,
    open_store,
)

__all__ = [
    "DEFAULT_BANKROLL",
    "CountingSystemName",
    "SettingsRecord",
    "StatsRecord",
    "TrainerRepository",
    "InMemoryStore",
    "KeyValueStore",
    "RedisStore",
    "StorageError",
    "open_store",
]
