"""Cards and the multi-deck shoe they are dealt from."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52

# Remaining-deck estimate never drops below half a deck so the true
# count stays bounded near the end of the shoe.
MIN_REMAINING_DECKS = 0.5

_SUIT_LETTERS = {"S": "♠", "H": "♥", "D": "♦", "C": "♣"}
_FACE_SYMBOLS = {11: "J", 12: "Q", 13: "K", 14: "A"}


class Suit(Enum):
    """Card suits, valued by their display symbol."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Suit":
        """Parse a suit from its symbol or initial letter."""
        try:
            return cls(_SUIT_LETTERS.get(text, text))
        except ValueError:
            raise ValueError(f"Invalid suit: {text}") from None


class Rank(Enum):
    """Card ranks; face cards and the Ace rank above ten."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return _FACE_SYMBOLS.get(self.value, str(self.value))

    @classmethod
    def parse(cls, text: str) -> "Rank":
        """Parse a rank from '2'-'10', 'T', 'J', 'Q', 'K' or 'A'."""
        if text == "T":
            return cls.TEN
        for rank in cls:
            if str(rank) == text:
                return rank
        raise ValueError(f"Invalid rank: {text}")

    @property
    def blackjack_value(self) -> int:
        """Points toward a hand total, with the Ace at its high value of 11."""
        if self == Rank.ACE:
            return 11
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        return self.blackjack_value == 10


class ShoeExhaustedError(IndexError):
    """Raised when a card is requested from an empty shoe."""


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    ``uid`` only distinguishes physical copies across decks for display
    keying; it takes no part in equality or hashing.
    """

    rank: Rank
    suit: Suit
    uid: str = field(default="", compare=False, repr=False)

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, text: str) -> "Card":
        """Build a card from rank then suit, e.g. '2♣', 'AS', 'Kh' or '10d'."""
        text = text.strip().upper()
        if len(text) < 2:
            raise ValueError(f"Invalid card string: {text}")
        return cls(Rank.parse(text[:-1]), Suit.parse(text[-1]))


class Shoe:
    """
    A multi-deck shoe for blackjack.

    Cards are dealt from the end of the internal list. Every card of the
    constructed population is either still in the shoe or in the dealt
    log, so ``cards_dealt + cards_remaining == total_cards`` always holds.
    """

    def __init__(
        self,
        num_decks: int = 6,
        penetration: float = 0.75,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize and shuffle a shoe with multiple decks.

        Args:
            num_decks: Number of decks in the shoe
            penetration: Fraction of shoe dealt before a reshuffle is due (0.0-1.0]
            rng: Random number generator for shuffling
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self._dealt: list[Card] = []
        self.reset(num_decks, penetration)

    def reset(self, num_decks: int, penetration: float = 0.75) -> None:
        """Rebuild the shoe with (possibly new) parameters and shuffle it."""
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self._num_decks = num_decks
        self._penetration = penetration
        self.shuffle()

    def shuffle(self) -> None:
        """Return every card to the shoe and shuffle (Fisher-Yates)."""
        self._cards = [
            Card(rank, suit, uid=f"{deck}-{suit.name.lower()}-{rank}")
            for deck in range(self._num_decks)
            for suit in Suit
            for rank in Rank
        ]
        self._dealt = []
        self._rng.shuffle(self._cards)
        logger.debug("Shuffled %d-deck shoe", self._num_decks)

    def deal_card(self) -> Card:
        """Deal the top card of the shoe."""
        if not self._cards:
            raise ShoeExhaustedError("Cannot deal from an empty shoe")
        card = self._cards.pop()
        self._dealt.append(card)
        return card

    def stack(self, cards: Iterable[Card]) -> None:
        """
        Move the given cards to the top of the shoe in dealing order.

        Cards are matched by rank and suit against the undealt population,
        so the shoe keeps its composition.

        Raises:
            ValueError: If a card is not among the undealt cards
        """
        picked: list[Card] = []
        for wanted in cards:
            for i in range(len(self._cards) - 1, -1, -1):
                if self._cards[i] == wanted:
                    picked.append(self._cards.pop(i))
                    break
            else:
                self._cards.extend(reversed(picked))
                raise ValueError(f"{wanted} is not in the shoe")
        self._cards.extend(reversed(picked))

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the dealt fraction has reached the penetration threshold."""
        return self.penetration_fraction >= self._penetration

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def cards_dealt(self) -> int:
        return len(self._dealt)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def penetration(self) -> float:
        """Return the configured penetration threshold."""
        return self._penetration

    @property
    def penetration_fraction(self) -> float:
        """Return the fraction of the shoe dealt since the last shuffle."""
        return len(self._dealt) / self.total_cards

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining (at least half a deck)."""
        return max(MIN_REMAINING_DECKS, len(self._cards) / CARDS_PER_DECK)

    def dealt_cards(self) -> list[Card]:
        """Return the cards dealt since the last shuffle, in dealing order."""
        return list(self._dealt)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
