"""Bankroll balance and count-based bet sizing."""

from bjtrainer.counting.metrics import betting_recommendation


class Bankroll:
    """
    The player's chip balance.

    Args:
        balance: Current balance
        starting_balance: Balance restored by reset()
    """

    def __init__(self, balance: int, starting_balance: int) -> None:
        self.balance = balance
        self.starting_balance = starting_balance

    def apply(self, delta: int) -> int:
        """Add a (possibly negative) settlement amount and return the new balance."""
        self.balance += delta
        return self.balance

    def reset(self) -> None:
        self.balance = self.starting_balance

    def covers(self, amount: int) -> bool:
        """Check if the balance can cover an additional amount at risk."""
        return amount <= self.balance

    def __repr__(self) -> str:
        return f"Bankroll(balance={self.balance})"


def recommended_bet(true_count: float, bankroll: int, base_unit: int) -> int:
    """
    Size a bet from the true count.

    The base unit is scaled by the bet ramp multiplier and capped at the
    bankroll.
    """
    multiplier = betting_recommendation(true_count).multiplier
    return max(0, min(base_unit * multiplier, bankroll))
