"""Hand evaluation for blackjack.

A Hand is an immutable record derived from its cards and the table rules.
Adding a card never patches a hand in place: the whole record is
re-evaluated from the new card sequence.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence

from bjtrainer.cards import Card

if TYPE_CHECKING:
    from bjtrainer.strategy.rules import GameRules

BLACKJACK = 21
DEALER_STANDS_ON = 17


@dataclass(frozen=True)
class Hand:
    """A blackjack hand with its derived values."""

    cards: tuple[Card, ...] = ()
    value: int = 0
    is_soft: bool = False
    is_blackjack: bool = False
    is_busted: bool = False
    can_split: bool = False
    can_double: bool = False
    is_split_hand: bool = False

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        return f"{cards_str} ({describe_value(self)})"


def calculate_value(cards: Sequence[Card]) -> tuple[int, bool]:
    """
    Calculate the best hand value.

    Aces start at 11 and are demoted to 1 one at a time while the total
    busts. Returns the highest total that doesn't bust, or the lowest bust
    total, together with the soft flag (an Ace still counted as 11).
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total, aces > 0 and total <= BLACKJACK


def check_blackjack(cards: Sequence[Card]) -> bool:
    """Check for a natural: exactly two cards, an Ace and a ten-value card."""
    if len(cards) != 2:
        return False
    return any(card.is_ace for card in cards) and any(
        card.is_ten_value for card in cards
    )


def check_bust(value: int) -> bool:
    return value > BLACKJACK


def can_split(cards: Sequence[Card], rules: "GameRules | None" = None) -> bool:
    """
    Check if two cards form a splittable pair.

    Ranks must match exactly: K-Q is not a pair even though both count 10.
    """
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def can_double(cards: Sequence[Card], rules: "GameRules | None" = None) -> bool:
    """Doubling is allowed on any first two cards."""
    return len(cards) == 2


def evaluate_hand(
    cards: Sequence[Card],
    rules: "GameRules",
    split_hand: bool = False,
) -> Hand:
    """
    Build the full Hand record for a card sequence.

    Args:
        cards: Cards in the hand, in dealing order
        rules: Active table rules
        split_hand: Whether the hand was created by splitting; such hands may
            only double with double-after-split and only split again with
            resplitting allowed

    Returns:
        The evaluated hand
    """
    cards = tuple(cards)
    value, is_soft = calculate_value(cards)

    splittable = can_split(cards, rules)
    doubleable = can_double(cards, rules)
    if split_hand:
        splittable = splittable and rules.resplit
        doubleable = doubleable and rules.double_after_split

    return Hand(
        cards=cards,
        value=value,
        is_soft=is_soft,
        is_blackjack=check_blackjack(cards),
        is_busted=check_bust(value),
        can_split=splittable,
        can_double=doubleable,
        is_split_hand=split_hand,
    )


def empty_hand() -> Hand:
    return Hand()


def add_card(hand: Hand, card: Card, rules: "GameRules") -> Hand:
    """Return a new hand with the card appended."""
    return evaluate_hand(hand.cards + (card,), rules, split_hand=hand.is_split_hand)


def should_dealer_hit(hand: Hand, dealer_hits_soft_17: bool) -> bool:
    """Dealer hits below 17, and on soft 17 when the H17 rule is in force."""
    if hand.is_busted:
        return False
    if hand.value < DEALER_STANDS_ON:
        return True
    return hand.value == DEALER_STANDS_ON and hand.is_soft and dealer_hits_soft_17


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if player_hand.is_busted:
        return -1
    if dealer_hand.is_busted:
        return 1

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack
    if player_bj and dealer_bj:
        return 0
    if player_bj:
        return 1
    if dealer_bj:
        return -1

    if player_hand.value > dealer_hand.value:
        return 1
    if dealer_hand.value > player_hand.value:
        return -1
    return 0


def describe_value(hand: Hand) -> str:
    """Describe a hand's value, e.g. 'Soft 17', 'Bust (24)' or 'Blackjack!'."""
    if hand.is_blackjack:
        return "Blackjack!"
    if hand.is_busted:
        return f"Bust ({hand.value})"
    if hand.is_soft:
        return f"Soft {hand.value}"
    return str(hand.value)


def describe_hand(hand: Hand) -> str:
    """Describe a hand's value and the extra options it offers."""
    if not hand.cards:
        return "Empty hand"
    description = describe_value(hand)
    if hand.can_split:
        return f"{description} (Can split)"
    if hand.can_double:
        return f"{description} (Can double)"
    return description
