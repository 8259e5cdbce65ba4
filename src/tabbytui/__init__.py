"""
tabbytui: a terminal chat client for Tabby inference servers.

Streams chat completions and health status in background tasks and feeds
the results to a single-threaded UI reducer through an ordered action bus.
"""

__version__ = "0.1.0"

from .core import (
    ApiError,
    ConnectionConfig,
    EndPoint,
    HealthMonitor,
    HttpProvider,
    ServerClient,
    StreamCompletionTask,
)
from .state import ActionBus, ActionLoop, ChatSession, Reducer

__all__ = [
    "ActionBus",
    "ActionLoop",
    "ApiError",
    "ChatSession",
    "ConnectionConfig",
    "EndPoint",
    "HealthMonitor",
    "HttpProvider",
    "Reducer",
    "ServerClient",
    "StreamCompletionTask",
]
