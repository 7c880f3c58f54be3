"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Mapping

from bjtrainer.cards import Card, Rank


class CountingSystem(ABC):
    """
    A fixed mapping from rank to tag value.

    The running count is always recomputed from the full sequence of dealt
    cards, so a system carries no count state of its own and one instance
    can be shared by every game.

    Subclasses set ``name`` and ``is_balanced`` (a balanced system sums to
    0 over a complete deck) and provide ``tag_values``.
    """

    name: ClassVar[str]
    is_balanced: ClassVar[bool]
    description: ClassVar[str] = ""

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Return the tag value for each Rank."""
        ...

    @property
    def full_deck_sum(self) -> int:
        return sum(self.tag_values[rank] for rank in Rank) * 4

    def card_value(self, card: Card) -> int:
        return self.tag_values[card.rank]

    def running_count(self, cards: Iterable[Card]) -> int:
        """Sum the tag values of every card in the sequence."""
        return sum(self.card_value(card) for card in cards)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
