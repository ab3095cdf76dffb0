"""Main entry point for FocusGuard."""

import typer

from focusguard import __version__
from focusguard.commands import config, focus, stats
from focusguard.services.config_service import get_config_service
from focusguard.utils.logger import get_logger, set_level
from focusguard.utils.ui.console import get_console

app = typer.Typer(
    name="focusguard",
    help="Pomodoro focus timer with local streaks and analytics",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(focus.app, name="focus", help="Focus sessions with pomodoro timer")
app.add_typer(stats.app, name="stats", help="Focus statistics and streaks")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Initialise logging from configuration."""
    logger = get_logger()
    try:
        config = get_config_service().config
        set_level(config.logging.level)
        console.no_color = not config.output.color
    except RuntimeError as e:
        logger.warning("Using default log level: %s", e)
        console.print(f"[yellow]⚠ {e}[/yellow]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FocusGuard[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
