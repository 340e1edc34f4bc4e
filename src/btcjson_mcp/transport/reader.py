"""Reading reply bodies from closable byte streams."""

from __future__ import annotations

import http.client
import logging
from typing import Protocol

import httpx

from ..protocol.errors import ReadError

logger = logging.getLogger(__name__)

# Failures a stream may raise while being consumed.
STREAM_ERRORS = (
    OSError,
    EOFError,
    http.client.HTTPException,
    httpx.TransportError,
    httpx.StreamError,
)


class ReadableStream(Protocol):
    def read(self) -> bytes: ...

    def close(self) -> None: ...


def _close_after_failure(stream: ReadableStream) -> None:
    # The read error is what gets reported; a close error here is secondary.
    try:
        stream.close()
    except STREAM_ERRORS as e:
        logger.debug("Error closing failed stream: %s", e)


def read_raw(stream: ReadableStream) -> bytes:
    """Read ``stream`` to completion and close it.

    The stream is closed exactly once whether the read succeeds or fails.
    An empty stream returns ``b""``.

    Raises:
        ReadError: If reading fails, or closing fails after a good read.
    """
    try:
        data = stream.read()
    except BaseException as e:
        _close_after_failure(stream)
        if isinstance(e, STREAM_ERRORS):
            raise ReadError(f"Error reading reply: {e}") from e
        raise

    try:
        stream.close()
    except STREAM_ERRORS as e:
        raise ReadError(f"Error closing reply stream: {e}") from e

    return bytes(data) if data else b""
