"""Pomodoro statistics commands."""

from datetime import datetime

import typer
from rich.table import Table

from focusguard.models.focus.presets import FOCUS_PRESETS, FocusPresetType
from focusguard.services.focus_service import get_recorder
from focusguard.utils.ui.console import get_console

console = get_console()
app = typer.Typer(help="Focus statistics and streaks")


@app.callback(invoke_without_command=True)
def show_stats(
    ctx: typer.Context,
    recent: int = typer.Option(
        10, "--recent", "-r", min=1, help="Recent sessions to list"
    ),
    days: int = typer.Option(
        7, "--days", "-d", min=1, help="Days in the daily breakdown"
    ),
):
    """Show pomodoro totals, streaks and recent history."""
    if ctx.invoked_subcommand is not None:
        return

    recorder = get_recorder()
    summary = recorder.get_summary()

    console.print("\n[bold]Focus Statistics[/bold]\n")
    console.print(f"Pomodoros completed: {summary['total_completed']}")
    hours, minutes = divmod(summary["total_focus_minutes"], 60)
    console.print(f"Total focus time: {hours}h {minutes}m")
    console.print(f"Sessions ended mid-cycle: {summary['sessions_ended_early']}")
    console.print(
        f"Current streak: [bold cyan]{summary['current_streak']}[/bold cyan] day(s)  "
        f"(longest: {summary['longest_streak']})"
    )
    console.print()

    preset_table = Table(title="By Preset", show_header=True)
    preset_table.add_column("Preset", style="cyan")
    preset_table.add_column("Pomodoros", justify="right")
    for mode in FocusPresetType:
        preset_table.add_row(FOCUS_PRESETS[mode].name, str(summary["by_preset"][mode.value]))
    console.print(preset_table)

    daily = Table(title=f"Last {days} Days", show_header=True)
    daily.add_column("Date", style="cyan")
    daily.add_column("Pomodoros", justify="right")
    daily.add_column("Focus", justify="right")
    for day in recorder.get_daily_counts(days=days):
        daily.add_row(day["date"], str(day["pomodoros"]), f"{day['focus_minutes']}m")
    console.print(daily)

    sessions = recorder.get_recent_sessions(limit=recent)
    if not sessions:
        console.print("[dim]No pomodoros recorded yet[/dim]\n")
        return

    history = Table(title=f"Recent Pomodoros ({len(sessions)})", show_header=True)
    history.add_column("Completed", style="cyan")
    history.add_column("Preset")
    history.add_column("Duration", justify="right")
    history.add_column("Task")
    for row in sessions:
        completed = datetime.fromisoformat(row["completed_at"]).strftime("%Y-%m-%d %H:%M")
        duration = "ended" if row["partial"] else f"{row['duration_minutes']}m"
        history.add_row(completed, row["preset"], duration, row["linked_task_id"] or "—")
    console.print(history)
    console.print()


@app.command("reset")
def reset_stats(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete all recorded pomodoro history."""
    if not yes and not typer.confirm("Delete all focus history?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    get_recorder().reset()
    console.print("[green]✓ Focus history cleared[/green]")
