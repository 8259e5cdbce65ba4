"""Single-threaded state machine of the home screen.

The reducer is the sole mutator of the chat session and the health view. It
performs no I/O and never awaits: every handler transforms HomeState and
returns the Effects the ActionLoop should start.
"""

import logging
from dataclasses import dataclass, field

from ..core.models import HealthViewModel
from .actions import (
    Action,
    Effect,
    FinalizeAssistant,
    HealthUpdated,
    KeyInput,
    Mode,
    ModeChange,
    Quit,
    ScheduleHealthCheck,
    SpawnCompletion,
    SpawnHealthCheck,
    StreamDelta,
    SubmitInput,
    Tick,
)
from .session import ChatSession

logger = logging.getLogger(__name__)

TITLE_CONNECTING = "Tabby | connecting..."
TITLE_UNREACHABLE = "⚠️ Tabby not responding"
RECENT_KEYS_MAX = 10

# Manual mode switches; Processing is only entered by submitting and only
# left by finalizing the current generation.
_MANUAL_TRANSITIONS = {
    (Mode.NORMAL, Mode.INSERT),
    (Mode.INSERT, Mode.NORMAL),
}


def health_title(view: HealthViewModel) -> str:
    """Window title for a health view. The sentinel gets a fixed indicator."""
    state = view.health_state
    if state is None:
        return TITLE_UNREACHABLE

    model = state.model or state.chat_model or "no model"
    title = f"Tabby {state.version.git_describe} | {model} | {state.device}"
    if state.cuda_devices:
        title += f" ({', '.join(state.cuda_devices)})"
    return title


@dataclass
class HomeState:
    """Everything the front end renders."""

    mode: Mode = Mode.NORMAL
    session: ChatSession = field(default_factory=ChatSession)
    health: HealthViewModel | None = None  # None until the first check returns
    title: str = TITLE_CONNECTING
    input_buffer: str = ""
    show_help: bool = False
    scroll: int | None = None  # None follows the tail of the transcript
    generation: int = 0
    health_requested: int = 0  # sequence of the last health check spawned
    health_applied: int = 0  # sequence of the health result shown
    ticks: int = 0
    recent_keys: list[str] = field(default_factory=list)

    def line_count(self) -> int:
        return sum(msg.content.count("\n") + 1 for msg in self.session.messages)


class Reducer:
    """Applies Actions to HomeState and derives the next interaction mode."""

    def __init__(
        self,
        state: HomeState | None = None,
        health_check_every: int = 0,
    ) -> None:
        """Initialize the reducer.

        Args:
            state: Initial state (a fresh HomeState if omitted)
            health_check_every: Schedule a health check every N ticks, 0 disables
        """
        self.state = state or HomeState()
        self._health_check_every = health_check_every
        self._handlers = {
            Tick: self._on_tick,
            KeyInput: self._on_key,
            SubmitInput: self._on_submit_input,
            HealthUpdated: self._on_health_updated,
            StreamDelta: self._on_stream_delta,
            FinalizeAssistant: self._on_finalize,
            ModeChange: self._on_mode_change,
            ScheduleHealthCheck: self._on_schedule_health_check,
        }

    def start(self) -> list[Effect]:
        """Effects to run when the screen first mounts."""
        return [self._spawn_health_check()]

    def update(self, action: Action) -> list[Effect]:
        """Apply one action. Returns the effects it produced."""
        handler = self._handlers.get(type(action))
        if handler is None:
            logger.warning("Unhandled action: %r", action)
            return []
        return handler(action)

    def _on_tick(self, action: Tick) -> list[Effect]:
        state = self.state
        state.ticks += 1
        state.recent_keys.clear()
        if self._health_check_every and state.ticks % self._health_check_every == 0:
            return [self._spawn_health_check()]
        return []

    def _on_schedule_health_check(self, action: ScheduleHealthCheck) -> list[Effect]:
        return [self._spawn_health_check()]

    def _spawn_health_check(self) -> SpawnHealthCheck:
        self.state.health_requested += 1
        return SpawnHealthCheck(self.state.health_requested)

    def _on_health_updated(self, action: HealthUpdated) -> list[Effect]:
        state = self.state
        # Checks may overlap; a slow older result must not replace a newer one.
        if action.sequence <= state.health_applied:
            logger.debug("Discarding stale health result %d", action.sequence)
            return []
        state.health_applied = action.sequence
        state.health = action.view
        state.title = health_title(action.view)
        return []

    def _on_mode_change(self, action: ModeChange) -> list[Effect]:
        current = self.state.mode
        if (current, action.mode) not in _MANUAL_TRANSITIONS:
            logger.warning("Ignoring mode change %s -> %s", current.value, action.mode.value)
            return []
        self.state.mode = action.mode
        return []

    def _on_submit_input(self, action: SubmitInput) -> list[Effect]:
        if self.state.mode is not Mode.INSERT:
            logger.warning("Ignoring submit while in %s mode", self.state.mode.value)
            return []
        return self._submit(action.text)

    def _on_stream_delta(self, action: StreamDelta) -> list[Effect]:
        if action.generation != self.state.generation:
            logger.debug("Discarding stale delta of generation %d", action.generation)
            return []
        self.state.session.apply_delta(action.text)
        return []

    def _on_finalize(self, action: FinalizeAssistant) -> list[Effect]:
        state = self.state
        if action.generation != state.generation:
            logger.debug("Discarding stale finalize of generation %d", action.generation)
            return []
        state.session.finalize_last(action.text)
        if state.mode is Mode.PROCESSING:
            state.mode = Mode.NORMAL
        return []

    def _on_key(self, action: KeyInput) -> list[Effect]:
        state = self.state
        state.recent_keys.append(action.key)
        del state.recent_keys[:-RECENT_KEYS_MAX]

        if state.mode is Mode.INSERT:
            return self._on_insert_key(action)

        char = action.character
        if char == "?":
            state.show_help = not state.show_help
        elif action.key == "escape" and state.show_help:
            state.show_help = False
        elif char == "q":
            return [Quit()]
        elif action.key == "up":
            self._scroll(-1)
        elif action.key == "down":
            self._scroll(1)
        elif char == "/" and state.mode is Mode.NORMAL:
            state.mode = Mode.INSERT
        return []

    def _on_insert_key(self, action: KeyInput) -> list[Effect]:
        state = self.state
        if action.key == "escape":
            state.mode = Mode.NORMAL
        elif action.key == "enter":
            text = state.input_buffer
            state.input_buffer = ""
            return self._submit(text)
        elif action.key == "backspace":
            state.input_buffer = state.input_buffer[:-1]
        elif action.character and action.character.isprintable():
            state.input_buffer += action.character
        return []

    def _submit(self, text: str) -> list[Effect]:
        state = self.state
        if not text.strip():
            state.mode = Mode.NORMAL
            return []

        state.session.append_user(text)
        state.session.append_assistant_placeholder()
        state.generation += 1
        state.mode = Mode.PROCESSING
        state.scroll = None
        logger.info("Submitted generation %d", state.generation)
        return [
            SpawnCompletion(
                generation=state.generation,
                session_id=state.session.id,
                messages=state.session.snapshot(),
            )
        ]

    def _scroll(self, step: int) -> None:
        state = self.state
        last_line = max(state.line_count() - 1, 0)
        current = last_line if state.scroll is None else state.scroll
        target = min(max(current + step, 0), last_line)
        state.scroll = None if target >= last_line else target
