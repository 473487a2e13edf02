"""Optimistic mutations with rollback.

A mutation is applied to in-memory state and rendered before the backing
call runs. If the backing call fails, the snapshot taken beforehand replaces
the in-memory state wholesale and the failure is announced.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from ticketapp.core.notifications import Notifier
from ticketapp.services.models import Result

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")


def run_optimistic(
    snapshot: Callable[[], S],
    apply: Callable[[], None],
    commit: Callable[[], Result[T]],
    restore: Callable[[S], None],
    render: Callable[[], None],
    notifier: Notifier,
    success_message: str,
    failure_message: str,
) -> Result[T]:
    """Apply a change immediately and roll it back if the commit fails.

    Args:
        snapshot: Captures the current in-memory state
        apply: Mutates in-memory state
        commit: Performs the backing operation
        restore: Replaces in-memory state with a snapshot
        render: Requests a re-render
        notifier: Sink for the outcome announcement
        success_message: Polite message on success
        failure_message: Assertive message on failure

    Returns:
        The commit result
    """
    previous = snapshot()

    apply()
    render()

    result = commit()

    if result.ok:
        notifier.polite(success_message)
    else:
        logger.warning(f"Rolling back optimistic change: {result.error.message}")
        restore(previous)
        render()
        notifier.assertive(failure_message)

    return result
