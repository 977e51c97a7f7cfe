"""Test fixtures for clocks and token stores."""

from .clock import FakeClock
from .token_stores import PoisonedTokenStore, UnavailableTokenStore, sequence_factory

__all__ = [
    "FakeClock",
    "PoisonedTokenStore",
    "UnavailableTokenStore",
    "sequence_factory",
]
