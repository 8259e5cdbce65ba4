"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript rendering and scrolling
- Input line and mode badge
- Help overlay
- Log panel rendering and level filtering

Widgets only read HomeState; they never mutate it.
"""

from datetime import datetime

from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import RichLog, Static

from ..state.actions import Mode
from ..state.reducer import HomeState
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel
from .formatting import format_help, format_input, format_recent_keys, format_transcript


class ChatView(VerticalScroll):
    """Scrollable conversation transcript."""

    BORDER_TITLE = "Chat"
    can_focus = False

    def compose(self):
        yield Static(id="transcript")

    def update_from(self, state: HomeState) -> None:
        """Render the session and apply the reducer's scroll position."""
        transcript = self.query_one("#transcript", Static)
        transcript.update(format_transcript(state.session.messages, state.session.pending))
        self.border_title = state.title
        self.set_class(state.mode is Mode.PROCESSING, "processing")
        if state.scroll is None:
            self.call_after_refresh(self.scroll_end, animate=False)
        else:
            self.call_after_refresh(self.scroll_to, y=state.scroll, animate=False)


class InputLine(Static):
    """Single line showing the input buffer and the current mode."""

    BORDER_TITLE = "Input"

    def update_from(self, state: HomeState) -> None:
        self.update(format_input(state.input_buffer, state.mode))
        self.set_class(state.mode is Mode.INSERT, "inserting")


class HelpPanel(Static):
    """Key binding overlay, toggled with '?'."""

    BORDER_TITLE = "Key Bindings"

    def on_mount(self) -> None:
        self.update(format_help())
        self.display = False

    def update_from(self, state: HomeState) -> None:
        self.display = state.show_help


class KeyTrail(Static):
    """Keys pressed since the last tick, shown bottom right."""

    def update_from(self, state: HomeState) -> None:
        self.update(Text(format_recent_keys(state.recent_keys), style="dim"))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Receives records from the logging PanelHandler. Hidden by default, shown
    with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        self.display = False

    def record(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        line.append(" ")
        line.append(f"{LogLevel.name(level):<5}", style=level_colors.get(level, "red"))
        line.append(f" [{component}] ", style="bold")
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
