"""Network core: providers, stream decoding, health and completion tasks."""

from .client import ServerClient
from .completion import StreamCompletionTask, build_request
from .config import ConnectionConfig, EndPoint, EndPointKind, Route, Settings, load_settings
from .decoder import NdjsonDecoder
from .errors import (
    ApiConnectionError,
    ApiDecodeError,
    ApiError,
    ApiStatusError,
    TransportInterruptedError,
)
from .health import HealthMonitor
from .models import (
    UNREACHABLE,
    ChatCompletionRequest,
    ChatRole,
    HealthState,
    HealthViewModel,
    Message,
    StreamChunk,
    Version,
)
from .provider import HttpProvider

__all__ = [
    "ApiConnectionError",
    "ApiDecodeError",
    "ApiError",
    "ApiStatusError",
    "ChatCompletionRequest",
    "ChatRole",
    "ConnectionConfig",
    "EndPoint",
    "EndPointKind",
    "HealthMonitor",
    "HealthState",
    "HealthViewModel",
    "HttpProvider",
    "Message",
    "NdjsonDecoder",
    "Route",
    "ServerClient",
    "Settings",
    "StreamChunk",
    "StreamCompletionTask",
    "TransportInterruptedError",
    "UNREACHABLE",
    "Version",
    "build_request",
    "load_settings",
]
