"""Failure injection for simulating transient backend errors.

The ticket service asks its policy whether an operation should fail before
touching storage. Tests use the deterministic policies; the CLI builds a
``RandomFailure`` from the configured rate.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol


class FailurePolicy(Protocol):
    """Decides whether a backing operation reports a simulated failure."""

    def should_fail(self, operation: str) -> bool:
        """Return True when the named operation ("list", "delete") must fail."""
        ...


class NeverFail:
    """Policy under which every operation succeeds."""

    def should_fail(self, operation: str) -> bool:
        return False


class AlwaysFail:
    """Policy under which every guarded operation fails.

    Args:
        operations: Restrict failures to these operation names (default: all)
    """

    def __init__(self, operations: Optional[set[str]] = None):
        self.operations = operations

    def should_fail(self, operation: str) -> bool:
        return self.operations is None or operation in self.operations


class RandomFailure:
    """Policy failing each call with a fixed probability."""

    def __init__(self, rate: float, rng: Optional[random.Random] = None):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Failure rate must be between 0.0 and 1.0, got {rate}")
        self.rate = rate
        self.rng = rng or random.Random()

    def should_fail(self, operation: str) -> bool:
        return self.rng.random() < self.rate


def policy_for_rate(rate: float, seed: Optional[int] = None) -> FailurePolicy:
    """Build the policy matching a configured failure rate."""
    if rate <= 0.0:
        return NeverFail()
    return RandomFailure(rate, random.Random(seed))
