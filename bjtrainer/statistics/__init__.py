"""Session statistics and bankroll."""

from bjtrainer.statistics.bankroll import Bankroll, recommended_bet
from bjtrainer.statistics.session_stats import GameStats

__all__ = [
    "Bankroll",
    "GameStats",
    "recommended_bet",
]
