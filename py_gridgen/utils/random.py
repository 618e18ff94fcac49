"""
Random number generation utilities.

Every draw of a generation pass must come from one seeded Alea PRNG.
Python's random and NumPy's random are not used anywhere in grid
generation, so a seed fully reproduces a grid.
"""

from datetime import datetime
from typing import Optional, Union

from ..core.alea_prng import AleaPRNG

Seed = Union[str, int]


def time_seed(now: Optional[datetime] = None) -> str:
    """
    Seed derived from the wall clock, formatted ``HH:MM:SS``.

    Args:
        now: Moment to format; defaults to the current local time

    Returns:
        Seed string
    """
    return (now or datetime.now()).strftime("%H:%M:%S")


def resolve_seed(use_random_seed: bool, seed: Optional[Seed]) -> Seed:
    """Pick the seed for one generation pass."""
    if use_random_seed or seed is None:
        return time_seed()
    return seed


def create_prng(seed: Seed) -> AleaPRNG:
    """
    Create the generator shared by every stage of one pass.

    Args:
        seed: Seed string or integer

    Returns:
        AleaPRNG instance
    """
    return AleaPRNG(seed)
