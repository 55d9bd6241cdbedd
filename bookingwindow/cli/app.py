"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import click
import typer
from rich.console import Console, Group
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.mock_settings_client import MockSettingsClient
from ..adapters.settings_client import SettingsClient
from ..adapters.token_store import TokenStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingWindowError
from ..domain.results import Success
from ..services.booking_window_controller import BookingWindowController

app = typer.Typer(
    name="bookingwindow",
    help="Manage the daily booking window (opening/closing time) of the ordering backend",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use an in-memory settings store instead of the backend.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


class ConsoleNotifier:
    """Prints controller notifications the way the admin panel shows toasts."""

    def __init__(self, console: Console):
        self.console = console

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]✓ {message}[/bold green]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✗ {message}[/bold red]")


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path], mock: bool) -> AppConfig:
    """
    Load the configuration file and apply environment overrides.

    In mock mode a missing file is fine; built-in defaults are used.
    """
    config_path = config_file or get_default_config_path()
    if mock and not config_path.exists():
        config = AppConfig()
    else:
        config = AppConfig.load_from_yaml(config_path)
    return config.with_env_overrides()


def _build_client(config: AppConfig, mock: bool):
    if mock:
        return MockSettingsClient(default_window=config.defaults.get_window())

    token = config.api.token or TokenStore(config.api.base_url).get_token()
    return SettingsClient.from_config(config, token=token)


def _build_controller(config: AppConfig, mock: bool) -> BookingWindowController:
    return BookingWindowController(
        store=_build_client(config, mock),
        notifier=ConsoleNotifier(console),
        default_window=config.defaults.get_window(),
    )


def _print_window(controller: BookingWindowController) -> None:
    """Render the schedule preview panel."""
    style = "green" if controller.is_valid else "red"

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Opens", style="bold green", justify="center")
    table.add_column("Closes", style="bold red", justify="center")
    table.add_row(controller.opening_display, controller.closing_display)

    status = f"[{style}]{controller.status_message}[/{style}]"
    if controller.is_dirty:
        original = controller.original
        status += f"\n[yellow]Unsaved changes (saved: {original.format_display()})[/yellow]"
    if controller.load_error is not None:
        status += "\n[yellow]⚠ Showing defaults, the backend value could not be confirmed[/yellow]"

    console.print(Panel.fit(
        Group(table, "", status),
        title="🕘 Booking Time Controller",
        border_style=style,
    ))


def _exit_on_error(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(1)


@app.command()
def show(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the current booking window.
    """
    try:
        config = _load_config(config_file, mock)
        _configure_logging(config.log_level, verbose)

        controller = _build_controller(config, mock)
        asyncio.run(controller.mount())

        console.print()
        _print_window(controller)
        console.print()

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command("set")
def set_window(
    opening: Annotated[Optional[str], typer.Option("--open", help="Opening time (HH:MM, 24h)")] = None,
    closing: Annotated[Optional[str], typer.Option("--close", help="Closing time (HH:MM, 24h)")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Update the booking window in one go.

    Examples:

        bookingwindow set --open 10:00 --close 22:00

        bookingwindow set --close 23:30 --mock
    """
    if opening is None and closing is None:
        console.print("[red]Error: pass --open, --close or both.[/red]")
        raise typer.Exit(1)

    try:
        config = _load_config(config_file, mock)
        _configure_logging(config.log_level, verbose)

        controller = _build_controller(config, mock)
        asyncio.run(controller.mount())

        if opening is not None:
            controller.set_opening_time(opening)
        if closing is not None:
            controller.set_closing_time(closing)

        if not controller.is_dirty:
            console.print("[yellow]No changes - the booking window is already set to these times.[/yellow]")
            return

        result = asyncio.run(controller.save())
        _print_window(controller)

        if not isinstance(result, Success):
            raise typer.Exit(1)

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command()
def edit(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Edit the booking window interactively (preview, save or reset).
    """
    try:
        config = _load_config(config_file, mock)
        _configure_logging(config.log_level, verbose)

        controller = _build_controller(config, mock)
        asyncio.run(controller.mount())

        while True:
            console.print()
            _print_window(controller)

            controller.set_opening_time(
                typer.prompt("→ Opening time (HH:MM)", default=controller.current.opening_time).strip()
            )
            controller.set_closing_time(
                typer.prompt("→ Closing time (HH:MM)", default=controller.current.closing_time).strip()
            )

            console.print()
            _print_window(controller)

            choices = ["edit"]
            if controller.can_save:
                choices.insert(0, "save")
            if controller.can_reset:
                choices.append("reset")
            choices.append("quit")

            action = typer.prompt(
                f"→ Next step ({'/'.join(choices)})",
                default=choices[0],
                type=click.Choice(choices, case_sensitive=False),
                show_choices=False,
            ).lower()

            if action == "save":
                asyncio.run(controller.save())
                if controller.is_dirty:
                    continue
                break
            if action == "reset":
                controller.reset()
                console.print("[dim]Pending changes discarded.[/dim]")
                continue
            if action == "edit":
                continue
            break

        if controller.is_dirty:
            console.print("[yellow]⚠ Leaving with unsaved changes.[/yellow]")

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command()
def login(
    token: Annotated[str, typer.Option("--token", "-t", prompt=True, hide_input=True, help="Bearer token issued by the backend")],
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Store the admin API token for the configured backend.
    """
    try:
        config = _load_config(config_file, mock=False)
        _configure_logging(config.log_level, verbose)

        store = TokenStore(config.api.base_url)
        store.set_token(token)

        if store.insecure_storage_warning:
            console.print(f"[yellow]⚠ {store.insecure_storage_warning}[/yellow]")
        console.print(f"\n[green]✓ Token stored ({store.cache_backend}).[/green]\n")

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command()
def logout(
    config_file: ConfigOption = None,
):
    """
    Remove the stored API token.
    """
    try:
        config = _load_config(config_file, mock=False)
        TokenStore(config.api.base_url).clear()
        console.print("\n[green]✓ Token removed.[/green]")
        console.print("Run 'bookingwindow login' before the next change.\n")

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command()
def whoami(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Verify the stored token against the backend (admin role required).
    """
    try:
        config = _load_config(config_file, mock)
        _configure_logging(config.log_level, verbose)

        client = _build_client(config, mock)
        user = asyncio.run(client.verify_admin())

        console.print(Panel.fit(
            f"[bold green]✓ Token valid[/bold green]\n\n"
            f"[bold]Name:[/bold] {user.get('name', 'N/A')}\n"
            f"[bold]E-Mail:[/bold] {user.get('email', 'N/A')}\n"
            f"[bold]Role:[/bold] {user.get('role', 'N/A')}",
            title="✓ Connection test"
        ))

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        _exit_on_error(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingwindow[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
