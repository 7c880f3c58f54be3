"""Per-hand results and round settlement."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from bjtrainer.hand import Hand, compare_hands


class HandResult(Enum):
    """Outcome of one player hand."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    BLACKJACK = "blackjack"

    def __str__(self) -> str:
        return self.value


def settle_hand(hand: Hand, dealer_hand: Hand, single_hand: bool = True) -> HandResult:
    """
    Determine the result of a player hand against the dealer.

    A two-card 21 only earns the blackjack result when the round is
    played with a single hand; after a split it is an ordinary win.
    """
    if hand.is_busted:
        return HandResult.LOSS

    outcome = compare_hands(hand, dealer_hand)
    if outcome > 0:
        if hand.is_blackjack and single_hand:
            return HandResult.BLACKJACK
        return HandResult.WIN
    if outcome < 0:
        return HandResult.LOSS
    return HandResult.PUSH


def payout(result: HandResult, wager: int, blackjack_payout: float) -> int:
    """
    Return the bankroll change for a settled hand.

    Blackjack winnings are rounded down to a whole chip.
    """
    if result == HandResult.BLACKJACK:
        return math.floor(wager * blackjack_payout)
    if result == HandResult.WIN:
        return wager
    if result == HandResult.LOSS:
        return -wager
    return 0


@dataclass(frozen=True)
class RoundSettlement:
    """All per-hand results of a round, computed before any bankroll change."""

    results: tuple[HandResult, ...]
    wagers: tuple[int, ...]
    net: int

    @property
    def headline(self) -> HandResult:
        """The first hand's result, shown as the round result."""
        return self.results[0]

    @property
    def hands(self) -> int:
        return len(self.results)

    def count(self, result: HandResult) -> int:
        return sum(1 for r in self.results if r == result)


def settle_round(
    hands: Sequence[Hand],
    wagers: Sequence[int],
    dealer_hand: Hand,
    blackjack_payout: float,
) -> RoundSettlement:
    """Settle every player hand, in hand order, against the dealer."""
    single_hand = len(hands) == 1
    results = tuple(settle_hand(hand, dealer_hand, single_hand) for hand in hands)
    net = sum(
        payout(result, wager, blackjack_payout)
        for result, wager in zip(results, wagers)
    )
    return RoundSettlement(results=results, wagers=tuple(wagers), net=net)


def settle_naturals(
    player_hand: Hand,
    dealer_hand: Hand,
    wager: int,
    blackjack_payout: float,
) -> RoundSettlement | None:
    """
    Settle a round decided by a natural on the initial deal.

    Returns:
        The settlement, or None when neither side has blackjack
    """
    if player_hand.is_blackjack and dealer_hand.is_blackjack:
        result = HandResult.PUSH
    elif player_hand.is_blackjack:
        result = HandResult.BLACKJACK
    elif dealer_hand.is_blackjack:
        result = HandResult.LOSS
    else:
        return None
    return RoundSettlement(
        results=(result,),
        wagers=(wager,),
        net=payout(result, wager, blackjack_payout),
    )
