"""Tests for loading and saving trainer records."""

import json
import logging
from unittest.mock import MagicMock

import pytest

from bjtrainer.persistence import (
    InMemoryStore,
    KeyValueStore,
    RedisStore,
    SettingsRecord,
    StorageError,
    TrainerRepository,
)
from bjtrainer.statistics import GameStats


class FailingStore(KeyValueStore):
    """A store whose backend is unreachable."""

    def get(self, key):
        raise StorageError(f"Failed to read {key}")

    def set(self, key, value):
        raise StorageError(f"Failed to write {key}")

    def delete(self, key):
        raise StorageError(f"Failed to delete {key}")


class TestDefaults:
    """Tests for missing records."""

    def test_missing_records(self, repository):
        assert repository.load_settings() == SettingsRecord()
        assert repository.load_stats() == GameStats()
        assert repository.load_bankroll() == 10000
        assert repository.load_bankroll(default=500) == 500


class TestRoundTrip:
    """Tests for saving then loading."""

    def test_settings(self, repository, store):
        settings = SettingsRecord(counting_system="Omega II", show_count=False)
        repository.save_settings(settings)

        stored = json.loads(store.get("blackjack-settings"))
        assert stored == {
            "countingSystem": "Omega II",
            "showCount": False,
            "showStrategyHints": True,
        }
        assert repository.load_settings() == settings

    def test_stats(self, repository, store):
        stats = GameStats(hands_played=5, wins=2, losses=2, pushes=0, blackjacks=1, total_profit=15)
        repository.save_stats(stats)

        assert json.loads(store.get("blackjack-stats"))["handsPlayed"] == 5
        assert repository.load_stats() == stats

    def test_bankroll(self, repository, store):
        repository.save_bankroll(9875)
        assert store.get("blackjack-bankroll") == "9875"
        assert repository.load_bankroll() == 9875

    def test_key_prefix(self, store):
        repository = TrainerRepository(store, prefix="trainer:")
        repository.save_bankroll(50)
        assert "trainer:bankroll" in store


class TestMalformedRecords:
    """Tests for records that fail validation."""

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            '{"countingSystem": "Zen"}',
            '{"showCount": "sometimes"}',
            "[]",
        ],
    )
    def test_settings(self, payload, caplog):
        repository = TrainerRepository(InMemoryStore({"blackjack-settings": payload}))
        with caplog.at_level(logging.WARNING):
            assert repository.load_settings() == SettingsRecord()
        assert "Malformed settings record" in caplog.text

    def test_negative_stats(self):
        store = InMemoryStore({"blackjack-stats": '{"handsPlayed": -1}'})
        assert TrainerRepository(store).load_stats() == GameStats()

    @pytest.mark.parametrize("payload", ["abc", "12.5", "null", '{"amount": 5}'])
    def test_bankroll(self, payload):
        store = InMemoryStore({"blackjack-bankroll": payload})
        assert TrainerRepository(store).load_bankroll() == 10000

    def test_partial_settings_keep_defaults(self):
        store = InMemoryStore({"blackjack-settings": '{"countingSystem": "KO"}'})
        settings = TrainerRepository(store).load_settings()
        assert settings.counting_system == "KO"
        assert settings.show_strategy_hints


class TestStorageFailures:
    """Tests for an unreachable backend."""

    def test_load_falls_back(self, caplog):
        repository = TrainerRepository(FailingStore())
        with caplog.at_level(logging.WARNING):
            assert repository.load_settings() == SettingsRecord()
            assert repository.load_stats() == GameStats()
            assert repository.load_bankroll() == 10000
        assert "Could not read" in caplog.text

    def test_save_does_not_raise(self, caplog):
        repository = TrainerRepository(FailingStore())
        with caplog.at_level(logging.ERROR):
            repository.save_settings(SettingsRecord())
            repository.save_stats(GameStats())
            repository.save_bankroll(100)
        assert caplog.text.count("Could not save") == 3

    def test_undecodable_redis_values_fall_back(self, caplog):
        """Test bytes that are not UTF-8 load as defaults instead of crashing."""
        client = MagicMock()
        client.get.return_value = b"\xff\xfe\xfd"
        repository = TrainerRepository(RedisStore(client))
        with caplog.at_level(logging.WARNING):
            assert repository.load_settings() == SettingsRecord()
            assert repository.load_stats() == GameStats()
            assert repository.load_bankroll() == 10000
        assert "Could not read" in caplog.text
