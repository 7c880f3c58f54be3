"""Knock-Out (KO) card counting system."""

from typing import Mapping

from bjtrainer.cards import Rank
from bjtrainer.counting.base import CountingSystem
from bjtrainer.counting.hilo import HiLoSystem


class KOSystem(CountingSystem):
    """
    Knock-Out: Hi-Lo with the 7 moved from 0 to +1.

    That one change leaves a full deck summing to +4, which lets the
    running count be played directly. The true count is still derived
    with the shared formula so every system displays the same way.
    """

    _TAG_VALUES: Mapping[Rank, int] = {**HiLoSystem._TAG_VALUES, Rank.SEVEN: 1}

    name = "KO"
    is_balanced = False
    description = (
        "Unbalanced system. Similar to Hi-Lo but 7s are +1. "
        "No need to convert to true count."
    )

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
