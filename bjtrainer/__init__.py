"""Blackjack card-counting and basic strategy trainer - UI-agnostic core."""

from bjtrainer.cards import Card, Shoe, ShoeExhaustedError, Rank, Suit
from bjtrainer.hand import Hand, evaluate_hand

__all__ = [
    "Card",
    "Shoe",
    "ShoeExhaustedError",
    "Rank",
    "Suit",
    "Hand",
    "evaluate_hand",
]
