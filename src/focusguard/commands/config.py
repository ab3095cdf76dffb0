"""Configuration management commands."""

import json

import typer

from focusguard.services.config_service import get_config_service
from focusguard.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS
from focusguard.utils.ui.console import get_console

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("show")
def show_config() -> None:
    """Show the current configuration."""
    svc = get_config_service()
    console.print_json(svc.config.model_dump_json())
    console.print(f"[dim]{svc.config_path}[/dim]")


@app.command("get")
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.default_mode)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError:
        console.print(f"[red]Configuration key '{key}' not found[/red]")
        raise typer.Exit(ERROR_INVALID_ARGS)

    if isinstance(value, dict):
        console.print_json(json.dumps(value))
    else:
        console.print(value)


@app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.tick_interval)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError:
        console.print(f"[red]Configuration key '{key}' not found[/red]")
        raise typer.Exit(ERROR_INVALID_ARGS)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    except RuntimeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(ERROR_GENERAL) from e

    console.print(f"[green]✓ Configuration '{key}' set to '{value}'[/green]")


@app.command("reset")
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    get_config_service().reset_config()
    console.print("[green]✓ Configuration reset to defaults[/green]")
