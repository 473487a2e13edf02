"""Screen-reader style notification sink.

Two channels exist: "polite" for non-interrupting confirmations and
"assertive" for interrupting errors. Both are fire-and-forget.
"""

from __future__ import annotations

from typing import Optional, Protocol

from rich.console import Console

POLITE = "polite"
ASSERTIVE = "assertive"


class Notifier(Protocol):
    """Interface the application layer uses to announce outcomes."""

    def polite(self, message: str) -> None:
        ...

    def assertive(self, message: str) -> None:
        ...


class ConsoleNotifier:
    """Notifier that prints announcements to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def polite(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def assertive(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")


class RecordingNotifier:
    """Notifier that keeps every announcement as a (channel, message) pair."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def polite(self, message: str) -> None:
        self.messages.append((POLITE, message))

    def assertive(self, message: str) -> None:
        self.messages.append((ASSERTIVE, message))

    def of(self, channel: str) -> list[str]:
        """Messages sent on one channel, oldest first."""
        return [message for kind, message in self.messages if kind == channel]

    def clear(self) -> None:
        self.messages.clear()
