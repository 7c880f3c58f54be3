"""Count arithmetic: running count, true count and bet guidance."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from bjtrainer.cards import Card
from bjtrainer.counting.base import CountingSystem


class CountLevel(Enum):
    """Qualitative bands for the true count, used for colour coding."""

    VERY_NEGATIVE = "very-negative"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    VERY_POSITIVE = "very-positive"


@dataclass(frozen=True)
class BetRecommendation:
    """Bet multiplier over the base unit with a short label."""

    multiplier: int
    description: str


# Checked top-down; the first threshold the true count reaches wins.
_BET_RAMP: tuple[tuple[float, BetRecommendation], ...] = (
    (5, BetRecommendation(8, "Very Favorable - Max Bet")),
    (4, BetRecommendation(6, "Very Favorable")),
    (3, BetRecommendation(4, "Favorable")),
    (2, BetRecommendation(2, "Slightly Favorable")),
    (1, BetRecommendation(1, "Neutral")),
    (0, BetRecommendation(1, "Slightly Unfavorable")),
)
_NEGATIVE_BET = BetRecommendation(1, "Unfavorable - Minimum Bet")


def running_count(cards: Iterable[Card], system: CountingSystem) -> int:
    """Sum the system's tag values over every card dealt since the last shuffle."""
    return system.running_count(cards)


def true_count(running: float, decks_remaining: float) -> float:
    """
    Calculate the true count.

    Args:
        running: The running count
        decks_remaining: Number of decks remaining in the shoe

    Returns:
        running / decks_remaining rounded half-up to one decimal,
        or 0.0 when no decks remain
    """
    if decks_remaining <= 0:
        return 0.0
    return math.floor(running / decks_remaining * 10 + 0.5) / 10


def betting_recommendation(true_count_value: float) -> BetRecommendation:
    """Map a true count onto the bet ramp."""
    for threshold, recommendation in _BET_RAMP:
        if true_count_value >= threshold:
            return recommendation
    return _NEGATIVE_BET


def count_level(true_count_value: float) -> CountLevel:
    """Bucket a true count into one of five display bands."""
    if true_count_value <= -2:
        return CountLevel.VERY_NEGATIVE
    if true_count_value < 0:
        return CountLevel.NEGATIVE
    if true_count_value >= 3:
        return CountLevel.VERY_POSITIVE
    if true_count_value >= 1:
        return CountLevel.POSITIVE
    return CountLevel.NEUTRAL
