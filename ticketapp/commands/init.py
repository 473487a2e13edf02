"""Init command implementation."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from ticketapp.core.config import Config

console = Console()


def command(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing configuration"
    ),
    show_config: bool = typer.Option(
        False, "--show", help="Show default configuration without creating"
    ),
):
    """Initialize ticketapp configuration (XDG-compliant).

    Creates ~/.config/ticketapp/config.toml with default settings.
    """
    config = Config(load=False)

    # Show config and exit
    if show_config:
        console.print("\n[bold]Default configuration:[/bold]\n")
        syntax = Syntax(
            Config.get_default_config(), "toml", theme="monokai", line_numbers=True
        )
        console.print(syntax)
        console.print(f"\n[dim]Would be created at: {config.config_file}[/dim]")
        return

    if config.exists() and not force:
        console.print(
            Panel(
                f"[yellow]Configuration already exists:[/yellow]\n"
                f"{config.config_file}\n\n"
                f"Use [bold]--force[/bold] to overwrite or [bold]--show[/bold] to view default config",
                title="Config Exists",
                border_style="yellow",
            )
        )
        raise typer.Exit(code=1)

    try:
        if force and config.exists():
            config.config_file.unlink()
            console.print("[yellow]Removed existing config[/yellow]")

        config_path = config.create_default()

        console.print(
            Panel(
                f"[green]✓[/green] Configuration created: [bold]{config_path}[/bold]\n\n"
                f"[dim]State directory: {config.state_dir}[/dim]\n"
                f"[dim]Default login: {Config.DEFAULT_SEED_EMAIL} / {Config.DEFAULT_SEED_PASSWORD}[/dim]",
                title="Ticketapp Initialized",
                border_style="green",
            )
        )
    except OSError as e:
        console.print(f"[red]ERROR:[/red] Failed to create configuration: {e}")
        raise typer.Exit(code=1) from e
