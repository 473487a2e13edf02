"""Runtime wiring of configuration, storage, services and coordinator."""

from typing import Optional

from rich.console import Console

from ticketapp.core.config import Config
from ticketapp.core.notifications import ConsoleNotifier
from ticketapp.core.store import JsonFileStore
from ticketapp.services.auth import AuthService
from ticketapp.services.failure import policy_for_rate
from ticketapp.services.tickets import TicketService
from ticketapp.ui.coordinator import AppCoordinator, RenderHook


class AppContext:
    """Builds the object graph a command needs from configuration.

    Attributes:
        config: Loaded configuration
        console: Console used for output and notifications
        store: File store rooted at the configured state directory
        auth: Auth service using the configured seed account
        tickets: Ticket service using the configured failure rate
    """

    def __init__(self, config: Optional[Config] = None, console: Optional[Console] = None):
        """Initialize services from configuration.

        Raises:
            ConfigError: If the configuration file is invalid
        """
        self.config = config or Config()
        self.console = console or Console()
        self.store = JsonFileStore(self.config.state_dir)
        self.notifier = ConsoleNotifier(self.console)

        seed_email, seed_password = self.config.seed_account
        self.auth = AuthService(self.store, seed_email, seed_password)
        self.tickets = TicketService(
            self.store,
            failure_policy=policy_for_rate(
                self.config.failure_rate, self.config.failure_seed
            ),
        )

    def coordinator(self, render: Optional[RenderHook] = None) -> AppCoordinator:
        return AppCoordinator(self.auth, self.tickets, self.notifier, render=render)
