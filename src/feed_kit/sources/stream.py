# src/feed_kit/sources/stream.py

"""Byte source over asynchronous readers (asyncio streams, sockets)."""

import asyncio
import logging
from typing import Any, Protocol

from feed_kit.errors import SourceError

from .base import ByteSource

logger = logging.getLogger(__name__)


class AsyncReader(Protocol):
    async def read(self, n: int = -1) -> bytes: ...


class StreamByteSource(ByteSource):
    """Wraps an object with ``async read(n)``, such as ``asyncio.StreamReader``.

    An empty read from the underlying reader means EOF, as with asyncio
    streams. The optional writer is closed together with the source.
    """

    def __init__(self, reader: AsyncReader, writer: Any | None = None) -> None:
        self._reader = reader
        self._writer = writer
        self._eof = False

    @classmethod
    async def connect(
        cls, host: str, port: int, timeout: float | None = 30.0
    ) -> "StreamByteSource":
        """Open a TCP connection and wrap its read side."""
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=timeout
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.error("Cannot connect to %s:%s: %s", host, port, exc)
            raise SourceError(f"Cannot connect to {host}:{port}: {exc}") from exc

        logger.info("Connected to %s:%s", host, port)
        return cls(reader, writer)

    async def read(self, size: int) -> bytes | None:
        if self._eof:
            return None
        try:
            chunk = await self._reader.read(size)
        except (OSError, asyncio.IncompleteReadError) as exc:
            raise SourceError(f"Stream read failed: {exc}") from exc

        if not chunk:
            self._eof = True
            return None
        return chunk

    async def close(self) -> None:
        self._eof = True
        if self._writer is None:
            return
        writer, self._writer = self._writer, None
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as exc:
            # Peer already gone; nothing left to release
            logger.debug("Ignoring error while closing stream: %s", exc)
