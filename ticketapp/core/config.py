"""XDG-compliant configuration management for ticketapp."""

import os
import tomllib
from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or holds invalid values."""


class Config:
    """Manages ticketapp configuration following XDG Base Directory spec.

    Attributes:
        config_dir: Path to ~/.config/ticketapp/
        config_file: Path to ~/.config/ticketapp/config.toml
    """

    DEFAULT_SEED_EMAIL = "test@ticketapp.test"
    DEFAULT_SEED_PASSWORD = "password123"

    def __init__(self, config_file: Optional[Path] = None, load: bool = True):
        """Initialize config paths using XDG Base Directory specification.

        Args:
            config_file: Explicit config file location (default: XDG location)
            load: Parse the config file now (False only resolves paths)
        """
        if config_file is not None:
            self.config_file = Path(config_file)
            self.config_dir = self.config_file.parent
        else:
            # Use XDG_CONFIG_HOME if set, otherwise default to ~/.config
            xdg_config = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            self.config_dir = Path(xdg_config) / "ticketapp"
            self.config_file = self.config_dir / "config.toml"

        # Load config if exists
        self._config = self._load() if load and self.config_file.exists() else {}

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_file.exists()

    def _load(self) -> dict:
        """Load configuration from TOML file."""
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

    def get(self, key: str, default=None):
        """Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'simulation.failure_rate')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def state_dir(self) -> Path:
        """Directory holding the persisted session, users and tickets documents.

        TICKETAPP_STATE_DIR wins over the config file, which wins over
        $XDG_STATE_HOME/ticketapp.
        """
        override = os.getenv("TICKETAPP_STATE_DIR")
        if override:
            return Path(override).expanduser()

        configured = self.get("storage.state_dir")
        if configured:
            return Path(configured).expanduser()

        xdg_state = os.getenv("XDG_STATE_HOME", os.path.expanduser("~/.local/state"))
        return Path(xdg_state) / "ticketapp"

    @property
    def failure_rate(self) -> float:
        """Probability that list/delete report a simulated network failure."""
        raw = self.get("simulation.failure_rate", 0.0)
        try:
            rate = float(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"simulation.failure_rate must be a number, got {raw!r}") from e

        if not 0.0 <= rate <= 1.0:
            raise ConfigError(
                f"simulation.failure_rate must be between 0.0 and 1.0, got {rate}"
            )
        return rate

    @property
    def failure_seed(self) -> Optional[int]:
        return self.get("simulation.seed")

    @property
    def seed_account(self) -> tuple[str, str]:
        """Email/password pair guaranteed to exist after the first auth call."""
        return (
            self.get("seed_account.email", self.DEFAULT_SEED_EMAIL),
            self.get("seed_account.password", self.DEFAULT_SEED_PASSWORD),
        )

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "WARNING")).upper()

    @staticmethod
    def get_default_config() -> str:
        """Return default configuration TOML template."""
        return """# Ticketapp Configuration
# Location: ~/.config/ticketapp/config.toml
# Follows XDG Base Directory Specification

[storage]
# Directory for the session, users and tickets documents
# (defaults to $XDG_STATE_HOME/ticketapp, override with TICKETAPP_STATE_DIR)
# state_dir = "~/.local/state/ticketapp"

[simulation]
# Probability (0.0 - 1.0) that loading or deleting tickets fails
failure_rate = 0.0

# Random seed for reproducible failures (optional)
# seed = 42

[seed_account]
# Account that always exists, for manual testing
email = "test@ticketapp.test"
password = "password123"

[logging]
# DEBUG, INFO, WARNING or ERROR
level = "WARNING"
"""

    def create_default(self) -> Path:
        """Create default configuration file.

        Returns:
            Path to created config file

        Raises:
            FileExistsError: If config already exists
        """
        if self.config_file.exists():
            raise FileExistsError(
                f"Configuration already exists: {self.config_file}\n"
                "Remove it first or use --force to overwrite"
            )

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(self.get_default_config())

        return self.config_file
