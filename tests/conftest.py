"""Pytest fixtures for blackjack trainer tests."""

import pytest
from random import Random

from bjtrainer.cards import Card, Shoe
from bjtrainer.hand import evaluate_hand
from bjtrainer.counting import HiLoSystem, KOSystem, Omega2System
from bjtrainer.strategy import BasicStrategy, GameRules
from bjtrainer.game import TrainerGame
from bjtrainer.persistence import InMemoryStore, TrainerRepository


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe(num_decks=6, penetration=0.75, rng=rng)


@pytest.fixture
def rules():
    """Default ruleset."""
    return GameRules()


@pytest.fixture
def make_cards():
    """Build cards from strings like 'AS', '10h', 'K♦'."""

    def _make(*specs: str) -> list[Card]:
        return [Card.from_string(text) for text in specs]

    return _make


@pytest.fixture
def make_hand(rules, make_cards):
    """Build an evaluated hand under the default rules."""

    def _make(*specs: str, split_hand: bool = False, hand_rules: GameRules | None = None):
        return evaluate_hand(make_cards(*specs), hand_rules or rules, split_hand=split_hand)

    return _make


@pytest.fixture
def blackjack_hand(make_hand):
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand(make_hand):
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand(make_hand):
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def pair_8s_hand(make_hand):
    """A pair of 8s hand."""
    return make_hand("8S", "8H")


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def ko():
    """KO counting system."""
    return KOSystem()


@pytest.fixture
def omega2():
    """Omega II counting system."""
    return Omega2System()


@pytest.fixture
def basic_strategy(rules):
    """Basic strategy for default rules."""
    return BasicStrategy(rules)


@pytest.fixture
def store():
    """An empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def repository(store):
    """Repository over the in-memory store."""
    return TrainerRepository(store)


@pytest.fixture
def game(rng, repository):
    """A new game on default rules with in-memory persistence."""
    return TrainerGame(rules=GameRules(), repository=repository, rng=rng)


@pytest.fixture
def deal(game, make_cards):
    """Stack the given cards on top of the shoe and start a round."""

    def _deal(*specs: str) -> TrainerGame:
        game.shoe.stack(make_cards(*specs))
        game.start_new_round()
        return game

    return _deal
