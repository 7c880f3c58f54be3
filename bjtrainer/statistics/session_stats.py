"""Session win/loss statistics."""

from dataclasses import dataclass

from bjtrainer.settlement import HandResult, RoundSettlement


@dataclass
class GameStats:
    """
    Aggregate results for the session.

    Each settled hand lands in exactly one of wins, losses, pushes or
    blackjacks, so those four always add up to hands_played.
    """

    hands_played: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    blackjacks: int = 0
    total_profit: int = 0

    def record(self, settlement: RoundSettlement) -> None:
        """Fold a whole round's settlement into the totals at once."""
        self.hands_played += settlement.hands
        self.wins += settlement.count(HandResult.WIN)
        self.losses += settlement.count(HandResult.LOSS)
        self.pushes += settlement.count(HandResult.PUSH)
        self.blackjacks += settlement.count(HandResult.BLACKJACK)
        self.total_profit += settlement.net

    def reset(self) -> None:
        self.hands_played = 0
        self.wins = 0
        self.losses = 0
        self.pushes = 0
        self.blackjacks = 0
        self.total_profit = 0

    @property
    def win_rate(self) -> float:
        """Percentage of hands won (0 before any hand)."""
        if self.hands_played == 0:
            return 0.0
        return self.wins / self.hands_played * 100

    @property
    def blackjack_rate(self) -> float:
        """Percentage of hands that were paid as blackjack."""
        if self.hands_played == 0:
            return 0.0
        return self.blackjacks / self.hands_played * 100
