"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from typing import Literal


def _parse_storage_backend() -> Literal["memory", "redis"]:
    """Parse BJ_STORAGE, falling back to the in-memory store."""
    backend = os.getenv("BJ_STORAGE", "memory").strip().lower()
    return "redis" if backend == "redis" else "memory"


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class StorageConfig:
    """Where settings, statistics and bankroll are persisted."""

    backend: Literal["memory", "redis"] = field(default_factory=_parse_storage_backend)
    key_prefix: str = "blackjack-"
    redis: RedisConfig = field(default_factory=RedisConfig)


@dataclass(frozen=True)
class GameConfig:
    """Default table money settings."""

    starting_bankroll: int = field(
        default_factory=lambda: int(os.getenv("BJ_STARTING_BANKROLL", "10000"))
    )
    min_bet: int = field(default_factory=lambda: int(os.getenv("BJ_MIN_BET", "10")))
    default_bet: int = 10
    base_betting_unit: int = 10  # Bet ramp multiplies this unit


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    game: GameConfig = field(default_factory=GameConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


# Global configuration instance
config = AppConfig()
