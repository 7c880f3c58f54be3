"""Card counting systems."""

from bjtrainer.counting.base import CountingSystem
from bjtrainer.counting.hilo import HiLoSystem
from bjtrainer.counting.ko import KOSystem
from bjtrainer.counting.omega2 import Omega2System
from bjtrainer.counting.metrics import (
    BetRecommendation,
    CountLevel,
    betting_recommendation,
    count_level,
    running_count,
    true_count,
)

DEFAULT_SYSTEM = "Hi-Lo"

_SYSTEMS: dict[str, CountingSystem] = {
    system.name: system for system in (HiLoSystem(), KOSystem(), Omega2System())
}


def available_systems() -> list[str]:
    """Return the names of the built-in counting systems."""
    return list(_SYSTEMS)


def get_counting_system(name: str) -> CountingSystem:
    """Look up a counting system by name, falling back to Hi-Lo."""
    return _SYSTEMS.get(name, _SYSTEMS[DEFAULT_SYSTEM])


__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "KOSystem",
    "Omega2System",
    "BetRecommendation",
    "CountLevel",
    "DEFAULT_SYSTEM",
    "available_systems",
    "betting_recommendation",
    "count_level",
    "get_counting_system",
    "running_count",
    "true_count",
]
