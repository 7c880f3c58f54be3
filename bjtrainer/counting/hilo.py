"""Hi-Lo card counting system."""

from typing import Mapping

from bjtrainer.cards import Rank
from bjtrainer.counting.base import CountingSystem


class HiLoSystem(CountingSystem):
    """
    Hi-Lo: the single-level balanced count most players learn first.

    Low cards (2-6) count +1, 7-9 are neutral and tens and Aces count -1,
    so a full deck sums to 0.
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        **dict.fromkeys((Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX), 1),
        **dict.fromkeys((Rank.SEVEN, Rank.EIGHT, Rank.NINE), 0),
        **dict.fromkeys((Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE), -1),
    }

    name = "Hi-Lo"
    is_balanced = True
    description = (
        "Most popular card counting system. +1 for low cards (2-6), "
        "0 for neutral (7-9), -1 for high cards (10-A)"
    )

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
