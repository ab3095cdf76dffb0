"""Focus mode commands with a live pomodoro timer."""

import typer

from focusguard.models.focus.engine import FocusSessionEngine
from focusguard.models.focus.presets import FocusPresetType, FocusState
from focusguard.models.focus.ui import (
    TimerDisplay,
    format_remaining,
    presets_table,
    show_ended_message,
    show_status,
    transition_message,
)
from focusguard.services.config_service import get_config_service
from focusguard.services.focus_service import get_focus_engine
from focusguard.utils.exit_codes import ERROR_INVALID_STATE, ERROR_NO_SESSION
from focusguard.utils.ui.console import get_console

console = get_console()
app = typer.Typer(help="Focus mode with pomodoro timer")


def _require_engine() -> FocusSessionEngine:
    """Engine with a restored session, or exit if there is none."""
    engine = get_focus_engine()
    if not engine.is_active:
        console.print("[yellow]No active focus session[/yellow]")
        console.print("Start one with 'focusguard focus start'.")
        raise typer.Exit(ERROR_NO_SESSION)
    return engine


def _watch(engine: FocusSessionEngine) -> None:
    tick_interval = get_config_service().config.focus.tick_interval
    result = TimerDisplay(console).run(
        engine,
        tick_interval=tick_interval,
        on_end=lambda session: show_ended_message(session, console),
    )
    if result == "detached":
        console.print(
            "\n[dim]Detached. The session keeps running; "
            "use 'focusguard focus watch' to reattach.[/dim]\n"
        )
    elif result == "ended":
        console.print("\n[yellow]The focus session was ended or replaced.[/yellow]\n")


@app.command("start")
def start_focus(
    mode: FocusPresetType | None = typer.Option(
        None,
        "--mode",
        "-m",
        case_sensitive=False,
        help="Preset: classic, deepwork or sprint (defaults to config)",
    ),
    task_id: str | None = typer.Option(
        None, "--task", "-t", help="Task ID to link to this session"
    ),
    watch: bool = typer.Option(
        True, "--watch/--no-watch", help="Show the live timer after starting"
    ),
):
    """Start a focus session, replacing any session in progress."""
    if mode is None:
        mode = get_config_service().config.focus.default_mode

    engine = get_focus_engine()
    previous = engine.session
    if previous is not None:
        console.print(
            f"[yellow]Replacing the running {previous.mode.value} session "
            f"({previous.pomodoros_completed} pomodoro(s) done)[/yellow]"
        )

    session = engine.start_session(mode, linked_task_id=task_id)
    preset = engine.preset

    console.print("\n[bold green]🍅 Focus session started[/bold green]")
    console.print(f"Preset: {preset.name}")
    console.print(
        f"Work: {preset.work_minutes}m | "
        f"Short break: {preset.short_break_duration // 60000}m | "
        f"Long break: {preset.long_break_duration // 60000}m "
        f"(after {preset.long_break_after})"
    )
    if session.linked_task_id:
        console.print(f"Task: #{session.linked_task_id}")
    console.print()

    if watch:
        _watch(engine)


@app.command("watch")
def watch_focus():
    """Show the live timer for the running session."""
    engine = _require_engine()
    _watch(engine)


@app.command("status")
def focus_status():
    """Show current focus session status."""
    engine = _require_engine()

    before = engine.session.state
    engine.tick()
    status = engine.snapshot()
    if status.session.state is not before:
        console.print(transition_message(status.session))

    if get_config_service().config.output.compact:
        session = status.session
        console.print(
            f"{session.state.label} {format_remaining(status.remaining)} "
            f"({session.current_session_in_cycle}/{status.preset.long_break_after}, "
            f"{session.pomodoros_completed} done)"
        )
        return

    show_status(status, console)


@app.command("skip-break")
def skip_break():
    """Skip the current break and start the next work period."""
    engine = _require_engine()
    engine.tick()

    if not engine.skip_break():
        console.print("[yellow]Not on a break - nothing to skip[/yellow]")
        raise typer.Exit(ERROR_INVALID_STATE)

    session = engine.session
    console.print(
        f"[green]✓ Break skipped[/green] - work period "
        f"{session.current_session_in_cycle}/{engine.preset.long_break_after}, "
        f"{format_remaining(engine.time_remaining())} to go"
    )


@app.command("complete")
def complete_work_period():
    """Finish the current work period early and start the break."""
    engine = _require_engine()
    engine.tick()

    if engine.session.state is not FocusState.WORKING:
        console.print("[yellow]Already on a break[/yellow]")
        raise typer.Exit(ERROR_INVALID_STATE)

    engine.complete_work_period()
    console.print(transition_message(engine.session))


@app.command("end")
def end_focus():
    """End the current focus session."""
    engine = _require_engine()
    engine.tick()

    session = engine.session.copy()
    engine.end_session()
    show_ended_message(session, console)


@app.command("presets")
def list_presets():
    """List the available focus presets."""
    console.print(presets_table())
