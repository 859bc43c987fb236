# src/feed_kit/sources/file.py

import asyncio
import logging
from pathlib import Path
from typing import BinaryIO

from feed_kit.errors import SourceError

from .base import ByteSource

logger = logging.getLogger(__name__)


class FileByteSource(ByteSource):
    """Byte source over a blocking binary handle.

    Reads run in a worker thread so the event loop is never blocked.
    The handle is closed by close() only when this source opened it.
    """

    def __init__(self, handle: BinaryIO, *, owns_handle: bool = False) -> None:
        self._handle = handle
        self._owns_handle = owns_handle
        self._eof = False

    @classmethod
    async def open(cls, path: str | Path) -> "FileByteSource":
        try:
            handle = await asyncio.to_thread(open, path, "rb")
        except OSError as exc:
            logger.error("Cannot open feed file %s: %s", path, exc)
            raise SourceError(f"Cannot open {path}: {exc}") from exc

        logger.info("Opened feed file %s", path)
        return cls(handle, owns_handle=True)

    async def read(self, size: int) -> bytes | None:
        if self._eof:
            return None
        try:
            chunk = await asyncio.to_thread(self._handle.read, size)
        except (OSError, ValueError) as exc:
            # ValueError: read on a closed file
            raise SourceError(f"File read failed: {exc}") from exc

        if chunk is None:
            # Non-blocking handle with nothing ready
            return b""
        if not chunk:
            self._eof = True
            return None
        return chunk

    async def close(self) -> None:
        self._eof = True
        if self._owns_handle and not self._handle.closed:
            await asyncio.to_thread(self._handle.close)
