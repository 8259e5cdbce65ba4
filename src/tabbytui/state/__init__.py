"""UI state: actions, the action bus, the chat session and the reducer.

Module structure (each module hides a design decision):
- actions.py: Message types flowing into and out of the reducer
- bus.py: The ordered channel between background tasks and the reducer
- session.py: Conversation model and its mutation rules
- reducer.py: Mode state machine and action handling
- runtime.py: Draining the bus and starting background tasks
"""

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
from .bus import ActionBus
from .reducer import HomeState, Reducer, health_title
from .runtime import ActionLoop
from .session import ChatSession

__all__ = [
    "Action",
    "ActionBus",
    "ActionLoop",
    "ChatSession",
    "Effect",
    "FinalizeAssistant",
    "HealthUpdated",
    "HomeState",
    "KeyInput",
    "Mode",
    "ModeChange",
    "Quit",
    "Reducer",
    "ScheduleHealthCheck",
    "SpawnCompletion",
    "SpawnHealthCheck",
    "StreamDelta",
    "SubmitInput",
    "Tick",
    "health_title",
]
