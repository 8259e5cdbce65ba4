"""Actions and effects exchanged between background tasks and the reducer.

Actions flow into the reducer through the ActionBus. Effects flow out of the
reducer and describe background work for the ActionLoop to start; the reducer
itself never performs them.
"""

from dataclasses import dataclass
from enum import Enum

from ..core.models import HealthViewModel, Message


class Mode(str, Enum):
    """Interaction mode of the home screen."""

    NORMAL = "normal"
    INSERT = "insert"
    PROCESSING = "processing"


@dataclass(frozen=True)
class Tick:
    """Periodic heartbeat from the front end."""


@dataclass(frozen=True)
class KeyInput:
    """A decoded key press.

    ``key`` is the key name (e.g. "enter", "escape", "up"); ``character`` is
    the printable character for the key, if any.
    """

    key: str
    character: str | None = None


@dataclass(frozen=True)
class SubmitInput:
    text: str


@dataclass(frozen=True)
class HealthUpdated:
    """Result of the health check numbered ``sequence``."""

    sequence: int
    view: HealthViewModel


@dataclass(frozen=True)
class StreamDelta:
    generation: int
    text: str


@dataclass(frozen=True)
class FinalizeAssistant:
    """Final content of the assistant message for one generation.

    ``failed`` is set when ``text`` describes an error.
    """

    generation: int
    text: str
    failed: bool = False


@dataclass(frozen=True)
class ModeChange:
    mode: Mode


@dataclass(frozen=True)
class ScheduleHealthCheck:
    pass


Action = (
    Tick
    | KeyInput
    | SubmitInput
    | HealthUpdated
    | StreamDelta
    | FinalizeAssistant
    | ModeChange
    | ScheduleHealthCheck
)


@dataclass(frozen=True)
class SpawnHealthCheck:
    sequence: int


@dataclass(frozen=True)
class SpawnCompletion:
    generation: int
    session_id: str
    messages: tuple[Message, ...]


@dataclass(frozen=True)
class Quit:
    pass


Effect = SpawnHealthCheck | SpawnCompletion | Quit
