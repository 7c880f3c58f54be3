"""Round phase enumeration."""

from enum import Enum


class Phase(Enum):
    """
    Round state machine phases.

    Flow: BETTING → DEALING → PLAYER_TURN → DEALER_TURN → RESULT → (new round)
    DEALING is passed through instantly while the initial cards go out.
    """

    BETTING = "betting"
    DEALING = "dealing"
    PLAYER_TURN = "player-turn"
    DEALER_TURN = "dealer-turn"
    RESULT = "result"

    def __str__(self) -> str:
        return self.value
