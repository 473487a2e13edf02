"""Main Typer application instance."""

import typer

from ticketapp.commands import auth, init, navigate, tickets
from ticketapp.core.config import Config, ConfigError
from ticketapp.core.logging import configure_logging

app = typer.Typer(
    name="ticketapp",
    help="Track support tickets from the terminal",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging before any command runs."""
    if verbose:
        level = "DEBUG"
    else:
        try:
            level = Config().log_level
        except ConfigError:
            level = "WARNING"
    configure_logging(level)


# Register commands
app.command(name="init")(init.command)
app.command(name="signup")(auth.signup_command)
app.command(name="login")(auth.login_command)
app.command(name="logout")(auth.logout_command)
app.command(name="whoami")(auth.whoami_command)
app.command(name="open")(navigate.command)
app.add_typer(tickets.app, name="tickets")


def main():
    """Entry point for pip-installed command."""
    app()


if __name__ == "__main__":
    main()
