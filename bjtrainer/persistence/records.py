"""Pydantic schemas for the persisted trainer records."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

CountingSystemName = Literal["Hi-Lo", "KO", "Omega II"]

DEFAULT_BANKROLL = 10000


class _Record(BaseModel):
    """Stored as camelCase JSON; constructed with either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SettingsRecord(_Record):
    """Trainer display settings."""

    counting_system: CountingSystemName = "Hi-Lo"
    show_count: bool = True
    show_strategy_hints: bool = True


class StatsRecord(_Record):
    """Session statistics."""

    hands_played: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    pushes: int = Field(default=0, ge=0)
    blackjacks: int = Field(default=0, ge=0)
    total_profit: int = 0


# The bankroll is stored as a bare JSON integer
BankrollRecord = TypeAdapter(int)
