"""Tests for configuration loading."""

import os
from unittest.mock import patch

from config import AppConfig, GameConfig, RedisConfig, StorageConfig


class TestGameConfig:
    """Tests for table money settings."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            game = GameConfig()
        assert game.starting_bankroll == 10000
        assert game.min_bet == 10
        assert game.default_bet == 10

    def test_from_environment(self):
        with patch.dict(os.environ, {"BJ_STARTING_BANKROLL": "500", "BJ_MIN_BET": "5"}):
            game = GameConfig()
        assert game.starting_bankroll == 500
        assert game.min_bet == 5


class TestStorageConfig:
    """Tests for storage selection."""

    def test_default_memory(self):
        with patch.dict(os.environ, {}, clear=True):
            assert StorageConfig().backend == "memory"

    def test_redis_backend(self):
        with patch.dict(os.environ, {"BJ_STORAGE": " Redis "}):
            assert StorageConfig().backend == "redis"

    def test_unknown_backend_falls_back(self):
        with patch.dict(os.environ, {"BJ_STORAGE": "sqlite"}):
            assert StorageConfig().backend == "memory"

    def test_key_prefix(self):
        assert StorageConfig().key_prefix == "blackjack-"


class TestRedisConfig:
    """Tests for the Redis connection URL."""

    def test_url_without_password(self):
        with patch.dict(os.environ, {"REDIS_HOST": "cache", "REDIS_PORT": "6380", "REDIS_DB": "1"}):
            redis_config = RedisConfig()
        assert redis_config.url == "redis://cache:6380/1"

    def test_url_with_password(self):
        redis_config = RedisConfig(host="cache", port=6379, db=0, password="secret")
        assert redis_config.url == "redis://:secret@cache:6379/0"


class TestAppConfig:
    def test_debug_flag(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            assert AppConfig().debug
        with patch.dict(os.environ, {}, clear=True):
            assert not AppConfig().debug
