"""Live timer UI for focus mode."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .engine import FocusSessionEngine, FocusStatus
from .keyboard import KeySource, get_keyboard_handler
from .presets import FOCUS_PRESETS, FocusPreset, FocusState
from .session import FocusSession

STATE_STYLES = {
    FocusState.WORKING: ("🍅", "cyan"),
    FocusState.SHORT_BREAK: ("☕", "green"),
    FocusState.LONG_BREAK: ("🌴", "magenta"),
}


def format_remaining(remaining_ms: int) -> str:
    """Render milliseconds as ``mm:ss``, flooring to whole seconds."""
    total_seconds = max(0, remaining_ms) // 1000
    mins, secs = divmod(total_seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def cycle_label(session: FocusSession, preset: FocusPreset) -> str:
    return f"Session {session.current_session_in_cycle}/{preset.long_break_after}"


def progress_dots(session: FocusSession, preset: FocusPreset) -> str:
    """Dots showing the position within the long-break cycle."""
    dots = []
    for i in range(1, preset.long_break_after + 1):
        if i < session.current_session_in_cycle:
            dots.append("●")  # Completed
        elif i == session.current_session_in_cycle:
            dots.append("●" if session.state.is_break else "◉")
        else:
            dots.append("○")  # Upcoming
    return " ".join(dots)


def transition_message(session: FocusSession) -> str:
    """One-line notice for the phase a session just entered."""
    if not session.state.is_break:
        return "[cyan]🍅 Break over - back to focus[/cyan]"
    if session.state is FocusState.LONG_BREAK:
        return (
            f"[magenta]🌴 Pomodoro {session.pomodoros_completed} complete - "
            "time for a long break[/magenta]"
        )
    return (
        f"[green]☕ Pomodoro {session.pomodoros_completed} complete - "
        "take a short break[/green]"
    )


def control_hints(session: FocusSession) -> str:
    if session.state.is_break:
        return "'s' skip break  •  'e' end  •  'q' detach"
    return "'c' complete  •  'e' end  •  'q' detach"


class TimerDisplay:
    """Renders a focus session and hosts the tick loop."""

    def __init__(
        self,
        console: Console | None = None,
        sleep: Callable[[float], None] | None = None,
        keyboard: KeySource | None = None,
    ):
        self.console = console or Console()
        self._sleep = sleep or time.sleep
        self._keyboard = keyboard

    def render(self, status: FocusStatus) -> Panel:
        """Build the timer panel for a status snapshot."""
        session = status.session
        emoji, color = STATE_STYLES[session.state]

        components = [
            Text(f"{emoji}  {session.state.label}", style=f"bold {color}", justify="center"),
            Text(
                f"{status.preset.name}  •  {cycle_label(session, status.preset)}",
                style="dim",
                justify="center",
            ),
            Text(""),
        ]

        if status.remaining < 60_000:
            timer_color = "red" if session.state is FocusState.WORKING else color
        else:
            timer_color = color
        components.append(
            Text(format_remaining(status.remaining), style=f"bold {timer_color}", justify="center")
        )
        components.append(Text(""))

        # Progress bar
        bar_width = 40
        pct = int(status.progress * 100)
        filled = int(bar_width * pct / 100)
        components.append(
            Text("▓" * filled + "░" * (bar_width - filled) + f"  {pct}%", style="dim", justify="center")
        )
        components.append(Text(""))
        components.append(Text(progress_dots(session, status.preset), justify="center"))
        components.append(
            Text(
                f"Pomodoros completed: {session.pomodoros_completed}",
                style="dim",
                justify="center",
            )
        )
        if session.linked_task_id:
            components.append(
                Text(f"Task: #{session.linked_task_id}", style="dim", justify="center")
            )

        return Panel(
            Align.center(Group(*components)),
            title="FocusGuard",
            subtitle=control_hints(session),
            border_style=color,
            padding=(1, 2),
        )

    def run(
        self,
        engine: FocusSessionEngine,
        tick_interval: float = 1.0,
        on_end: Callable[[FocusSession], None] | None = None,
    ) -> str:
        """
        Drive ``engine.tick()`` until the session ends or the user detaches.

        Keys: 's' skips a break, 'c' completes the work period early,
        'e' ends the session, 'q' or Ctrl+C detaches. The session keeps
        running on the wall clock after a detach. Changes made by another
        process are picked up from the store before every tick.

        Returns 'stopped' (ended here, ``on_end`` gets the final session),
        'ended' (ended or replaced elsewhere) or 'detached'.
        """
        status = engine.snapshot()
        if status is None:
            return "ended"

        keyboard = self._keyboard or get_keyboard_handler()
        ended: FocusSession | None = None
        try:
            with Live(self.render(status), console=self.console, refresh_per_second=4) as live:
                while engine.reload():
                    before = engine.session.state
                    key = keyboard.get_key()
                    if key == "e":
                        ended = engine.session.copy()
                        engine.end_session()
                        break
                    if key == "q":
                        return "detached"
                    if key == "s":
                        engine.skip_break()
                    elif key == "c":
                        engine.complete_work_period()

                    engine.tick()
                    status = engine.snapshot()
                    if status.session.state is not before:
                        live.console.print(transition_message(status.session))
                    live.update(self.render(status))
                    self._sleep(tick_interval)
        except KeyboardInterrupt:
            return "detached"
        finally:
            keyboard.stop()

        if ended is None:
            return "ended"
        if on_end:
            on_end(ended)
        return "stopped"


def show_status(status: FocusStatus, console: Console | None = None) -> None:
    """Print a one-shot summary of the current session."""
    console = console or Console()
    session = status.session
    emoji, color = STATE_STYLES[session.state]

    console.print(f"\n[bold {color}]{emoji} {session.state.label}[/bold {color}]")
    console.print(f"Preset: {status.preset.name} ({session.mode.value})")
    console.print(f"Cycle: {cycle_label(session, status.preset)}  {progress_dots(session, status.preset)}")
    console.print(f"Time remaining: {format_remaining(status.remaining)}")
    console.print(f"Pomodoros completed: {session.pomodoros_completed}")
    if session.linked_task_id:
        console.print(f"Task: #{session.linked_task_id}")
    console.print()


def show_ended_message(session: FocusSession, console: Console | None = None) -> None:
    """Show a summary panel when a session is ended."""
    console = console or Console()
    preset = FOCUS_PRESETS[session.mode]
    focus_minutes = session.pomodoros_completed * preset.work_minutes

    if session.pomodoros_completed:
        body = f"""[bold green]🎉 Focus session ended[/bold green]

Preset: {preset.name}
Pomodoros completed: {session.pomodoros_completed}
Focus time: {focus_minutes} minutes"""
        border = "green"
    else:
        body = """[yellow]Focus session ended[/yellow]

No pomodoros were completed, nothing was recorded."""
        border = "yellow"

    console.print(Panel(body, border_style=border, padding=(1, 2)))


def presets_table() -> Table:
    table = Table(title="Focus Presets", show_header=True)
    table.add_column("Preset", style="cyan")
    table.add_column("Name")
    table.add_column("Work", justify="right")
    table.add_column("Short break", justify="right")
    table.add_column("Long break", justify="right")
    table.add_column("Long break after", justify="right")

    for mode, preset in FOCUS_PRESETS.items():
        table.add_row(
            mode.value,
            preset.name,
            f"{preset.work_duration // 60000}m",
            f"{preset.short_break_duration // 60000}m",
            f"{preset.long_break_duration // 60000}m",
            str(preset.long_break_after),
        )
    return table
