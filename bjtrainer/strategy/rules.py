"""Blackjack rule variations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    """
    Blackjack table rules configuration.

    Rules are fixed for the lifetime of a shoe: changing any of them
    rebuilds the shoe and discards the round in progress.
    """

    # Shoe configuration
    num_decks: int = 6
    penetration: float = 0.75  # Reshuffle once 75% of the shoe is dealt

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Split and double rules
    double_after_split: bool = True  # DAS
    resplit: bool = False
    max_split_hands: int = 2

    # Surrender rules
    early_surrender: bool = False
    late_surrender: bool = False

    # Payouts (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5
    insurance_payout: float = 2.0

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if not 0.0 < self.penetration <= 1.0:
            raise ValueError("penetration must be between 0 and 1")
        if self.max_split_hands < 2 or self.max_split_hands > 4:
            raise ValueError("max_split_hands must be between 2 and 4")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")

    @classmethod
    def vegas_strip(cls) -> "GameRules":
        """Standard Vegas Strip rules."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=False,
            double_after_split=True,
            resplit=True,
            max_split_hands=4,
            late_surrender=True,
        )

    @classmethod
    def single_deck(cls) -> "GameRules":
        """Single deck rules."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            double_after_split=False,
            late_surrender=False,
        )
