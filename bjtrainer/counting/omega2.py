"""Omega II card counting system."""

from typing import Mapping

from bjtrainer.cards import Rank
from bjtrainer.counting.base import CountingSystem


class Omega2System(CountingSystem):
    """
    Omega II: a balanced two-level count.

    4-6 count +2 and tens -2; the Ace is neutral and 9 is -1.
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        **dict.fromkeys((Rank.TWO, Rank.THREE, Rank.SEVEN), 1),
        **dict.fromkeys((Rank.FOUR, Rank.FIVE, Rank.SIX), 2),
        **dict.fromkeys((Rank.EIGHT, Rank.ACE), 0),
        Rank.NINE: -1,
        **dict.fromkeys((Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING), -2),
    }

    name = "Omega II"
    is_balanced = True
    description = (
        "Advanced multi-level system for experienced counters. "
        "More accurate but requires more practice."
    )

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
