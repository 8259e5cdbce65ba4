"""HTTP connection provider.

Hides the transport library and the mapping of its failures onto the ApiError
taxonomy. The underlying ``httpx.AsyncClient`` is shared and read-only after
construction, so concurrent calls proceed independently without a lock.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import ConnectionConfig, Route
from .decoder import NdjsonDecoder
from .errors import (
    ApiConnectionError,
    ApiDecodeError,
    ApiStatusError,
    TransportInterruptedError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Receives each decoded delta, synchronously and in arrival order.
ChunkCallback = Callable[[str], None]


class HttpProvider:
    """Performs single-shot GETs and streaming POSTs against one endpoint.

    Example:
        async with httpx.AsyncClient() as http:
            provider = HttpProvider(ConnectionConfig(base_url, EndPoint.stable_v1()), http)
            health = await provider.get(Route.HEALTH, HealthState)
    """

    def __init__(self, config: ConnectionConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.endpoint_url

    async def get(self, route: Route | str, model: type[ModelT]) -> ModelT:
        """GET a route and validate the JSON body into ``model``.

        Raises:
            ApiConnectionError: If the URL is invalid or the server cannot be reached
            ApiStatusError: If the server answers with a non-2xx status
            ApiDecodeError: If the body is not valid JSON for ``model``
        """
        url = self._config.url_for(route)
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, timeout=self._config.timeout)
        except httpx.DecodingError as e:
            raise ApiDecodeError(f"Undecodable response body: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ApiConnectionError(f"Request failed: {_describe(e)}") from e

        if response.is_error:
            raise ApiStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise ApiDecodeError(f"JSON parsing error: {e}") from e

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ApiDecodeError(
                f"JSON parsing error: {e.error_count()} invalid field(s) in {model.__name__}"
            ) from e

    async def post_stream(
        self,
        route: Route | str,
        body: dict[str, Any],
        on_chunk: ChunkCallback,
    ) -> str:
        """POST ``body`` and stream back newline-delimited ``{content}`` records.

        Each record's content is passed to ``on_chunk`` as soon as it is
        decoded. Returns the concatenation of all content at EOF.

        Raises:
            ApiConnectionError: If the URL is invalid or the connection fails before any chunk
            ApiStatusError: If the server answers with a non-2xx status
            ApiDecodeError: If a record is malformed (the stream is abandoned)
            TransportInterruptedError: If the connection drops after a chunk
        """
        url = self._config.url_for(route)
        decoder = NdjsonDecoder()
        parts: list[str] = []

        def deliver(content: str) -> None:
            parts.append(content)
            on_chunk(content)

        logger.debug("POST (stream) %s", url)
        try:
            async with self._client.stream(
                "POST", url, json=body, timeout=self._config.timeout
            ) as response:
                if response.is_error:
                    await response.aread()
                    raise ApiStatusError(response.status_code)

                async for frame in response.aiter_bytes():
                    for chunk in decoder.feed(frame):
                        deliver(chunk.content)

            for chunk in decoder.flush():
                deliver(chunk.content)
        except httpx.DecodingError as e:
            raise ApiDecodeError(f"Undecodable response body: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if parts:
                raise TransportInterruptedError(
                    f"Streaming error: {_describe(e)}", partial="".join(parts)
                ) from e
            raise ApiConnectionError(f"Request failed: {_describe(e)}") from e

        logger.debug("Stream from %s finished after %d chunk(s)", url, len(parts))
        return "".join(parts)


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__
