"""Newline-delimited JSON decoding for streaming completion bodies.

The transport hands us byte frames of arbitrary size. A frame may hold several
records, part of a record, or split a multi-byte UTF-8 sequence. Records are
only decoded once their terminating newline (or EOF) has arrived.
"""

import json

from pydantic import ValidationError

from .errors import ApiDecodeError
from .models import StreamChunk


class NdjsonDecoder:
    """Incremental decoder turning byte frames into StreamChunk records."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, frame: bytes) -> list[StreamChunk]:
        """Add a frame and return every record it completed, in order.

        Raises:
            ApiDecodeError: If a completed record is malformed
        """
        self._buffer.extend(frame)
        chunks: list[StreamChunk] = []
        while True:
            newline = self._buffer.find(b"\n")
            if newline < 0:
                break
            line = bytes(self._buffer[:newline])
            del self._buffer[: newline + 1]
            chunk = self._decode_line(line)
            if chunk is not None:
                chunks.append(chunk)
        return chunks

    def flush(self) -> list[StreamChunk]:
        """Decode whatever is left at end of stream."""
        line = bytes(self._buffer)
        self._buffer.clear()
        chunk = self._decode_line(line)
        return [chunk] if chunk is not None else []

    @staticmethod
    def _decode_line(line: bytes) -> StreamChunk | None:
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ApiDecodeError(f"Invalid UTF-8 in stream: {e}") from e

        text = text.strip()
        if not text:
            return None

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ApiDecodeError(f"Invalid JSON in stream: {e.msg}") from e

        try:
            return StreamChunk.model_validate(payload)
        except ValidationError as e:
            raise ApiDecodeError(f"Unexpected stream record: {text[:80]}") from e
