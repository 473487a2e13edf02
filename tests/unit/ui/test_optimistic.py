"""Unit tests for run_optimistic."""

from ticketapp.core.notifications import ASSERTIVE, POLITE, RecordingNotifier
from ticketapp.services.models import ErrorKind, Result
from ticketapp.ui.optimistic import run_optimistic


class Cache:
    """Minimal in-memory state with an event log."""

    def __init__(self, items):
        self.items = list(items)
        self.events = []

    def render(self):
        self.events.append(("render", list(self.items)))


def run(cache, notifier, commit_result):
    def commit():
        cache.events.append(("commit", list(cache.items)))
        return commit_result

    def restore(previous):
        cache.items = previous

    def apply():
        cache.items = [i for i in cache.items if i != "b"]

    return run_optimistic(
        snapshot=lambda: list(cache.items),
        apply=apply,
        commit=commit,
        restore=restore,
        render=cache.render,
        notifier=notifier,
        success_message="Removed.",
        failure_message="Could not remove.",
    )


class TestRunOptimistic:
    """Test the optimistic mutation protocol."""

    def test_success_keeps_optimistic_state(self):
        cache = Cache(["a", "b", "c"])
        notifier = RecordingNotifier()

        result = run(cache, notifier, Result.success())

        assert result.ok
        assert cache.items == ["a", "c"]
        assert notifier.messages == [(POLITE, "Removed.")]

    def test_apply_and_render_precede_commit(self):
        cache = Cache(["a", "b", "c"])

        run(cache, RecordingNotifier(), Result.success())

        assert cache.events == [("render", ["a", "c"]), ("commit", ["a", "c"])]

    def test_failure_restores_snapshot(self):
        cache = Cache(["a", "b", "c"])
        notifier = RecordingNotifier()

        result = run(cache, notifier, Result.failure(ErrorKind.NETWORK_ERROR, "down"))

        assert not result.ok
        assert cache.items == ["a", "b", "c"]
        assert cache.events == [
            ("render", ["a", "c"]),
            ("commit", ["a", "c"]),
            ("render", ["a", "b", "c"]),
        ]
        assert notifier.messages == [(ASSERTIVE, "Could not remove.")]

    def test_restore_is_full_replace(self):
        """Changes made after the snapshot are discarded on rollback."""
        cache = Cache(["a", "b"])
        notifier = RecordingNotifier()

        def commit():
            cache.items.append("late")
            return Result.failure(ErrorKind.NETWORK_ERROR, "down")

        run_optimistic(
            snapshot=lambda: list(cache.items),
            apply=lambda: None,
            commit=commit,
            restore=lambda previous: setattr(cache, "items", previous),
            render=cache.render,
            notifier=notifier,
            success_message="ok",
            failure_message="failed",
        )

        assert cache.items == ["a", "b"]
