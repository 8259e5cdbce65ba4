from typing import Any

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ConnectionConfig, EndPoint
from .provider import HttpProvider


class ServerClient:
    """Owns the transport shared by all providers talking to one server.

    Health checks go to the stable ``/v1`` surface and chat completions to the
    ``/v1beta`` surface; both providers reuse the same ``httpx.AsyncClient``.

    Supports async context manager protocol for cleanup:
        async with ServerClient("http://localhost:8080") as client:
            health = HealthMonitor(client.stable)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        chat_endpoint: EndPoint | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server base URL, without the API prefix
            timeout: Request timeout in seconds
            chat_endpoint: Override the endpoint used for chat completions
            **client_kwargs: Extra kwargs for httpx.AsyncClient (e.g. transport)
        """
        self._http = httpx.AsyncClient(**client_kwargs)
        self._stable = HttpProvider(
            ConnectionConfig(base_url, EndPoint.stable_v1(), timeout), self._http
        )
        self._beta = HttpProvider(
            ConnectionConfig(base_url, chat_endpoint or EndPoint.beta_v1(), timeout), self._http
        )

    @property
    def stable(self) -> HttpProvider:
        """Provider for the stable API (health)."""
        return self._stable

    @property
    def beta(self) -> HttpProvider:
        """Provider for the beta API (chat completions)."""
        return self._beta

    async def close(self) -> None:
        """Close the shared transport."""
        await self._http.aclose()

    async def __aenter__(self) -> "ServerClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await self.close()
        except RuntimeError as e:
            # httpx/anyio may complain when the loop is already gone
            if "Event loop is closed" not in str(e):
                raise
