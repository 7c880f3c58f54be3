"""Basic strategy tables for blackjack."""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Mapping

from bjtrainer.cards import Card, Rank
from bjtrainer.hand import BLACKJACK, Hand
from bjtrainer.strategy.rules import GameRules


class PlayerAction(Enum):
    """Possible player actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"

    def __str__(self) -> str:
        return self.value


class Shorthand(Enum):
    """Table entries, resolved against what the player may actually do."""

    H = "H"  # Hit
    S = "S"  # Stand
    D = "D"  # Double if allowed, else hit
    DS = "Ds"  # Double if allowed, else stand
    P = "P"  # Split
    PH = "Ph"  # Split if double after split is allowed, else hit
    RH = "Rh"  # Surrender if allowed, else hit
    RS = "Rs"  # Surrender if allowed, else stand

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StrategyDecision:
    """A recommended action and a human-readable reason for it."""

    action: PlayerAction
    explanation: str = ""


# Table keys: dealer upcard and pair rank are 2-11 (face cards = 10, Ace = 11)
TableKey = tuple[int, int]
DEALER_UPCARDS = tuple(range(2, 12))


def rank_key(rank: Rank) -> int:
    """Normalize a rank for table lookup: J/Q/K become 10, Ace becomes 11."""
    return rank.blackjack_value


def resolve_shorthand(
    code: Shorthand,
    can_double: bool,
    can_surrender: bool,
    double_after_split: bool,
    is_pair: bool = False,
) -> PlayerAction:
    """Resolve a table entry into a concrete action given live eligibility."""
    if code == Shorthand.H:
        return PlayerAction.HIT
    if code == Shorthand.S:
        return PlayerAction.STAND
    if code == Shorthand.D:
        return PlayerAction.DOUBLE if can_double else PlayerAction.HIT
    if code == Shorthand.DS:
        return PlayerAction.DOUBLE if can_double else PlayerAction.STAND
    if code == Shorthand.P:
        return PlayerAction.SPLIT
    if code == Shorthand.PH:
        return PlayerAction.SPLIT if is_pair and double_after_split else PlayerAction.HIT
    if code == Shorthand.RH:
        return PlayerAction.SURRENDER if can_surrender else PlayerAction.HIT
    if code == Shorthand.RS:
        return PlayerAction.SURRENDER if can_surrender else PlayerAction.STAND
    raise ValueError(f"Unknown strategy code: {code!r}")


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Pre-computed dictionaries for O(1) lookup, built for multi-deck play.
    The tables are the same for every rule set; rule options (double,
    surrender, double after split) are applied when an entry is resolved.
    """

    def __init__(self, rules: GameRules | None = None) -> None:
        """
        Initialize basic strategy for given rules.

        Args:
            rules: Rule set to generate strategy for. Uses default if None.
        """
        self.rules = rules or GameRules()
        self._hard_table = self._build_hard_table()
        self._soft_table = self._build_soft_table()
        self._pair_table = self._build_pair_table()

    def decide(self, hand: Hand, dealer_card: Card) -> StrategyDecision:
        """
        Get the basic strategy decision for a hand against a dealer upcard.

        Pairs are looked up first, then soft totals, then hard totals
        (capped at 21). Anything the tables don't cover is a hit.
        """
        dealer = rank_key(dealer_card.rank)
        can_surrender = self.rules.late_surrender

        if hand.can_split and len(hand.cards) == 2:
            code = self._pair_table.get((rank_key(hand.cards[0].rank), dealer))
            if code is not None:
                action = resolve_shorthand(
                    code,
                    hand.can_double,
                    can_surrender,
                    self.rules.double_after_split,
                    is_pair=True,
                )
                return StrategyDecision(action, _explain(action, hand, dealer_card, "pair"))

        if hand.is_soft:
            code = self._soft_table.get((hand.value, dealer))
            category = "soft"
        else:
            code = self._hard_table.get((min(hand.value, BLACKJACK), dealer))
            category = "hard"

        if code is None:
            return StrategyDecision(PlayerAction.HIT, "Hit to improve your hand")

        action = resolve_shorthand(
            code, hand.can_double, can_surrender, self.rules.double_after_split
        )
        return StrategyDecision(action, _explain(action, hand, dealer_card, category))

    def _build_hard_table(self) -> Mapping[TableKey, Shorthand]:
        """Build hard totals strategy table."""
        H, S, D = Shorthand.H, Shorthand.S, Shorthand.D
        Rh = Shorthand.RH

        table: dict[TableKey, Shorthand] = {}

        # Hard 5-8: Always hit
        for total in range(5, 9):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = H

        # Hard 9: Double vs 3-6
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = D if 3 <= dealer <= 6 else H

        # Hard 10: Double vs 2-9
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = D if dealer <= 9 else H

        # Hard 11: Double vs 2-10
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = D if dealer <= 10 else H

        # Hard 12: Stand vs 4-6
        for dealer in DEALER_UPCARDS:
            table[(12, dealer)] = S if 4 <= dealer <= 6 else H

        # Hard 13-16: Stand vs 2-6
        for total in range(13, 17):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S if dealer <= 6 else H

        # Surrender 15 vs 10, 16 vs 9-A
        table[(15, 10)] = Rh
        for dealer in (9, 10, 11):
            table[(16, dealer)] = Rh

        # Hard 17+: Always stand
        for total in range(17, BLACKJACK + 1):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_soft_table(self) -> Mapping[TableKey, Shorthand]:
        """Build soft totals strategy table."""
        H, S, D, Ds = Shorthand.H, Shorthand.S, Shorthand.D, Shorthand.DS

        table: dict[TableKey, Shorthand] = {}

        # Soft 13-14 (A,2 / A,3): Double vs 5-6
        for total in (13, 14):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if dealer in (5, 6) else H

        # Soft 15-16 (A,4 / A,5): Double vs 4-6
        for total in (15, 16):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if 4 <= dealer <= 6 else H

        # Soft 17 (A,6): Double vs 3-6
        for dealer in DEALER_UPCARDS:
            table[(17, dealer)] = D if 3 <= dealer <= 6 else H

        # Soft 18 (A,7): Stand vs 2, double vs 3-6, stand vs 7-8, hit vs 9-A
        table[(18, 2)] = S
        for dealer in (3, 4, 5, 6):
            table[(18, dealer)] = Ds
        for dealer in (7, 8):
            table[(18, dealer)] = S
        for dealer in (9, 10, 11):
            table[(18, dealer)] = H

        # Soft 19-21: Always stand
        for total in range(19, BLACKJACK + 1):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_pair_table(self) -> Mapping[TableKey, Shorthand]:
        """Build pair splitting strategy table."""
        H, S = Shorthand.H, Shorthand.S
        P, Ph = Shorthand.P, Shorthand.PH

        table: dict[TableKey, Shorthand] = {}

        # Aces and 8s: Always split
        for pair in (11, 8):
            for dealer in DEALER_UPCARDS:
                table[(pair, dealer)] = P

        # 10s: Never split
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = S

        # 5s: Never split, hit
        for dealer in DEALER_UPCARDS:
            table[(5, dealer)] = H

        # 2s and 3s: Split vs 4-7, and vs 2-3 with DAS
        for pair in (2, 3):
            for dealer in DEALER_UPCARDS:
                if dealer in (2, 3):
                    table[(pair, dealer)] = Ph
                elif dealer <= 7:
                    table[(pair, dealer)] = P
                else:
                    table[(pair, dealer)] = H

        # 4s: Split vs 5-6 with DAS
        for dealer in DEALER_UPCARDS:
            table[(4, dealer)] = Ph if dealer in (5, 6) else H

        # 6s: Split vs 3-6, and vs 2 with DAS
        table[(6, 2)] = Ph
        for dealer in range(3, 12):
            table[(6, dealer)] = P if dealer <= 6 else H

        # 7s: Split vs 2-7
        for dealer in DEALER_UPCARDS:
            table[(7, dealer)] = P if dealer <= 7 else H

        # 9s: Split vs 2-9 except 7
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = S if dealer in (7, 10, 11) else P

        return table

    def chart(self, category: str) -> dict[int, dict[int, Shorthand]]:
        """
        Return one table as rows of {dealer upcard: code} for display.

        Args:
            category: "hard", "soft" or "pair"
        """
        tables = {
            "hard": self._hard_table,
            "soft": self._soft_table,
            "pair": self._pair_table,
        }
        if category not in tables:
            raise ValueError(f"Unknown chart category: {category}")

        rows: dict[int, dict[int, Shorthand]] = {}
        for (row, dealer), code in sorted(tables[category].items()):
            rows.setdefault(row, {})[dealer] = code
        return rows


def _explain(action: PlayerAction, hand: Hand, dealer_card: Card, category: str) -> str:
    if category == "pair":
        rank = hand.cards[0].rank
        hand_desc = f"pair of {rank}s"
    elif category == "soft":
        hand_desc = f"soft {hand.value}"
    else:
        hand_desc = f"hard {hand.value}"

    dealer = f"dealer {dealer_card.rank}"
    templates = {
        PlayerAction.HIT: f"Hit with {hand_desc} vs {dealer}",
        PlayerAction.STAND: f"Stand with {hand_desc} vs {dealer}",
        PlayerAction.DOUBLE: f"Double down with {hand_desc} vs {dealer}",
        PlayerAction.SPLIT: f"Split {hand_desc} vs {dealer}",
        PlayerAction.SURRENDER: f"Surrender {hand_desc} vs {dealer}",
    }
    return templates[action]


@lru_cache(maxsize=16)
def strategy_for(rules: GameRules) -> BasicStrategy:
    """Return the (cached) strategy tables for a rule set."""
    return BasicStrategy(rules)


def basic_strategy_decision(
    hand: Hand,
    dealer_card: Card,
    rules: GameRules,
) -> StrategyDecision:
    """Compute the basic strategy decision for a hand under the given rules."""
    return strategy_for(rules).decide(hand, dealer_card)


def is_correct_basic_strategy(
    action: PlayerAction,
    hand: Hand,
    dealer_card: Card,
    rules: GameRules,
) -> bool:
    """Check if an action matches the basic strategy recommendation."""
    return basic_strategy_decision(hand, dealer_card, rules).action == action
