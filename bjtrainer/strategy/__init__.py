"""Strategy tables and table rules."""

from bjtrainer.strategy.rules import GameRules
from bjtrainer.strategy.basic import (
    BasicStrategy,
    PlayerAction,
    Shorthand,
    StrategyDecision,
    basic_strategy_decision,
    is_correct_basic_strategy,
    resolve_shorthand,
)

__all__ = [
    "GameRules",
    "BasicStrategy",
    "PlayerAction",
    "Shorthand",
    "StrategyDecision",
    "basic_strategy_decision",
    "is_correct_basic_strategy",
    "resolve_shorthand",
]
