"""Main Textual TUI application.

Decodes key presses into Actions, runs the ActionLoop as a background worker
and re-renders the reducer state after every action. Widgets never touch the
network; everything they show comes from HomeState.
"""

import asyncio
import contextlib
import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.events import Key
from textual.widgets import Footer

from ..core.client import ServerClient
from ..logger import parse_level, setup_logging
from ..state.actions import KeyInput, Tick
from ..state.reducer import HomeState, Reducer
from ..state.runtime import ActionLoop
from .config import TICK_INTERVAL, ticks_for_interval
from .styles import APP_CSS
from .themes import TABBY_DARK
from .widgets import ChatView, DebugPanel, HelpPanel, InputLine, KeyTrail

logger = logging.getLogger(__name__)


class TabbyTuiApp(App):
    """Textual TUI for chatting with an inference server."""

    CSS = APP_CSS
    TITLE = "Tabby"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        client: ServerClient,
        health_check_interval: float = 0.0,
        log_level: str | None = None,
        log_file: str | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._log_level = log_level
        self._log_file = log_file
        reducer = Reducer(health_check_every=ticks_for_interval(health_check_interval))
        self._action_loop = ActionLoop(
            client,
            reducer,
            on_change=self._render_state,
            on_quit=self.exit,
        )

    @property
    def state(self) -> HomeState:
        return self._action_loop.state

    def compose(self) -> ComposeResult:
        yield ChatView(id="chat-view")
        yield HelpPanel(id="help-panel")
        yield InputLine(id="input-line")
        yield KeyTrail(id="key-trail")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(TABBY_DARK)
        self.theme = "tabby-dark"

        debug_panel = self.query_one("#debug-panel", DebugPanel)
        setup_logging(self._log_level, self._log_file, panel_sink=debug_panel.record)
        if self._log_level is not None:
            debug_panel.log_level = parse_level(self._log_level)
            debug_panel.show()

        self._render_state(self.state)
        self.set_interval(TICK_INTERVAL, self._tick)
        self.run_worker(self._action_loop.run(), name="action-loop", exclusive=True)
        logger.info("Connected to %s", self._client.stable.url)

    def on_unmount(self) -> None:
        # The panel is going away; keep only the file handler, if any.
        setup_logging(self._log_level, self._log_file)

    def on_key(self, event: Key) -> None:
        """Forward every key press to the reducer as a KeyInput action."""
        self._action_loop.bus.send(KeyInput(event.key, event.character))
        event.stop()

    def _tick(self) -> None:
        self._action_loop.bus.send(Tick())

    def _render_state(self, state: HomeState) -> None:
        self.query_one("#chat-view", ChatView).update_from(state)
        self.query_one("#input-line", InputLine).update_from(state)
        self.query_one("#help-panel", HelpPanel).update_from(state)
        self.query_one("#key-trail", KeyTrail).update_from(state)
        self.sub_title = state.title

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        debug_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = debug_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_tui(
    base_url: str,
    timeout: float,
    health_check_interval: float = 0.0,
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """Run the Textual TUI against one server.

    Args:
        base_url: Server base URL
        timeout: Request timeout in seconds
        health_check_interval: Seconds between health checks, 0 checks only at start
        log_level: Log panel level (debug/info/warning/error), None to hide
        log_file: Path of a JSON lines log file, None to disable
    """
    client = ServerClient(base_url, timeout=timeout)
    app = TabbyTuiApp(
        client,
        health_check_interval=health_check_interval,
        log_level=log_level,
        log_file=log_file,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await client.close()
