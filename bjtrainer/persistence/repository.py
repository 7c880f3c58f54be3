"""Load and save the settings, stats and bankroll records."""

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from bjtrainer.persistence.records import (
    DEFAULT_BANKROLL,
    BankrollRecord,
    SettingsRecord,
    StatsRecord,
)
from bjtrainer.persistence.store import KeyValueStore, StorageError
from bjtrainer.statistics.session_stats import GameStats

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

SETTINGS_KEY = "settings"
STATS_KEY = "stats"
BANKROLL_KEY = "bankroll"


class TrainerRepository:
    """
    Three independent records in a key-value store.

    Loading never raises: a missing, unreadable or malformed record is
    replaced by its default. Saving never raises either; failures are
    logged and play continues.
    """

    def __init__(self, store: KeyValueStore, prefix: str = "blackjack-") -> None:
        self._store = store
        self._prefix = prefix

    def _key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    def _read(self, name: str) -> str | None:
        try:
            raw = self._store.get(self._key(name))
        except StorageError:
            logger.warning("Could not read %s record, using defaults", name, exc_info=True)
            return None
        if raw is None:
            logger.debug("No stored %s record, using defaults", name)
        return raw

    def _write(self, name: str, payload: str) -> None:
        try:
            self._store.set(self._key(name), payload)
        except StorageError:
            logger.error("Could not save %s record", name, exc_info=True)

    def _load_model(self, name: str, model: type[RecordT]) -> RecordT:
        raw = self._read(name)
        if raw is None:
            return model()
        try:
            return model.model_validate_json(raw)
        except ValidationError:
            logger.warning("Malformed %s record, using defaults", name)
            return model()

    def load_settings(self) -> SettingsRecord:
        return self._load_model(SETTINGS_KEY, SettingsRecord)

    def save_settings(self, settings: SettingsRecord) -> None:
        self._write(SETTINGS_KEY, settings.model_dump_json(by_alias=True))

    def load_stats(self) -> GameStats:
        record = self._load_model(STATS_KEY, StatsRecord)
        return GameStats(**record.model_dump())

    def save_stats(self, stats: GameStats) -> None:
        record = StatsRecord(
            hands_played=stats.hands_played,
            wins=stats.wins,
            losses=stats.losses,
            pushes=stats.pushes,
            blackjacks=stats.blackjacks,
            total_profit=stats.total_profit,
        )
        self._write(STATS_KEY, record.model_dump_json(by_alias=True))

    def load_bankroll(self, default: int = DEFAULT_BANKROLL) -> int:
        raw = self._read(BANKROLL_KEY)
        if raw is None:
            return default
        try:
            return BankrollRecord.validate_json(raw)
        except ValidationError:
            logger.warning("Malformed bankroll record, using default")
            return default

    def save_bankroll(self, amount: int) -> None:
        self._write(BANKROLL_KEY, BankrollRecord.dump_json(amount).decode("utf-8"))
