"""Connection configuration.

Hides how endpoint selectors and routes map to URLs. Everything here is
resolved once, when the configuration object is built.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0
DEFAULT_HEALTH_INTERVAL = 30.0


class EndPointKind(str, Enum):
    """Which API surface a provider talks to."""

    STABLE_V1 = "v1"
    BETA_V1 = "v1beta"
    CUSTOM_URL = "custom"


_ENDPOINT_PATHS = {
    EndPointKind.STABLE_V1: "/v1",
    EndPointKind.BETA_V1: "/v1beta",
}


@dataclass(frozen=True)
class EndPoint:
    """Endpoint selector: a fixed API prefix or an arbitrary URL."""

    kind: EndPointKind
    url: str | None = None

    @classmethod
    def stable_v1(cls) -> "EndPoint":
        return cls(EndPointKind.STABLE_V1)

    @classmethod
    def beta_v1(cls) -> "EndPoint":
        return cls(EndPointKind.BETA_V1)

    @classmethod
    def custom(cls, url: str) -> "EndPoint":
        return cls(EndPointKind.CUSTOM_URL, url)

    def __post_init__(self) -> None:
        if self.kind is EndPointKind.CUSTOM_URL and not self.url:
            raise ValueError("Custom endpoint requires a url")

    def resolve(self, base_url: str) -> str:
        """Return the absolute URL prefix for this endpoint."""
        if self.kind is EndPointKind.CUSTOM_URL:
            return self.url.rstrip("/")
        return base_url.rstrip("/") + _ENDPOINT_PATHS[self.kind]


class Route(str, Enum):
    """Routes relative to an endpoint prefix."""

    HEALTH = "health"
    CHAT_COMPLETIONS = "chat_completions"

    @property
    def path(self) -> str:
        return _ROUTE_PATHS[self]


_ROUTE_PATHS = {
    Route.HEALTH: "/health",
    Route.CHAT_COMPLETIONS: "/chat/completions",
}


@dataclass(frozen=True)
class ConnectionConfig:
    """Immutable connection settings for one provider.

    ``endpoint_url`` is computed at construction and never re-resolved.
    """

    base_url: str = DEFAULT_BASE_URL
    endpoint: EndPoint = field(default_factory=EndPoint.stable_v1)
    timeout: float = DEFAULT_TIMEOUT
    endpoint_url: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        object.__setattr__(self, "endpoint_url", self.endpoint.resolve(self.base_url))

    def url_for(self, route: Route | str) -> str:
        """Absolute URL of a route under this endpoint."""
        path = route.path if isinstance(route, Route) else route
        if not path.startswith("/"):
            path = "/" + path
        return self.endpoint_url + path


@dataclass(frozen=True)
class Settings:
    """Application settings, usually loaded from the environment."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    health_check_interval: float = DEFAULT_HEALTH_INTERVAL  # 0 disables
    log_level: str | None = None
    log_file: str | None = None


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Environment variables:
        TABBY_URL: Server base URL (default: http://localhost:8080)
        TABBY_TIMEOUT: Request timeout in seconds (default: 30)
        TABBY_HEALTH_INTERVAL: Seconds between health checks, 0 disables (default: 30)
        TABBY_LOG_LEVEL: Show the log panel at this level (debug/info/warning/error)
        TABBY_LOG_FILE: Also write JSON log lines to this file
    """
    timeout = _float_from_env("TABBY_TIMEOUT", DEFAULT_TIMEOUT)
    if timeout == 0:
        logger.warning("Ignoring TABBY_TIMEOUT=0, using %s", DEFAULT_TIMEOUT)
        timeout = DEFAULT_TIMEOUT
    return Settings(
        base_url=os.getenv("TABBY_URL") or DEFAULT_BASE_URL,
        timeout=timeout,
        health_check_interval=_float_from_env("TABBY_HEALTH_INTERVAL", DEFAULT_HEALTH_INTERVAL),
        log_level=os.getenv("TABBY_LOG_LEVEL") or None,
        log_file=os.getenv("TABBY_LOG_FILE") or None,
    )
