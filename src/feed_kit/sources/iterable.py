# src/feed_kit/sources/iterable.py

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from feed_kit.errors import SourceError

from .base import ByteSource


class IterableByteSource(ByteSource):
    """Byte source over an iterable of chunks (sync or async).

    Chunks larger than the requested size are handed out in pieces.
    An empty chunk is reported as a transient-empty read. An OSError raised
    by the iterable is reported as SourceError.
    """

    def __init__(self, chunks: Iterable[bytes] | AsyncIterable[bytes]) -> None:
        self._chunks: Iterator[bytes] | AsyncIterator[bytes]
        if isinstance(chunks, AsyncIterable):
            self._chunks = aiter(chunks)
        else:
            self._chunks = iter(chunks)
        self._pending = b""
        self._eof = False

    async def read(self, size: int) -> bytes | None:
        if not self._pending:
            if self._eof:
                return None
            try:
                chunk = await self._next_chunk()
            except OSError as exc:
                self._eof = True
                raise SourceError(f"Chunk iterable failed: {exc}") from exc
            if chunk is None:
                self._eof = True
                return None
            if not chunk:
                return b""
            self._pending = bytes(chunk)

        out, self._pending = self._pending[:size], self._pending[size:]
        return out

    async def close(self) -> None:
        self._eof = True
        self._pending = b""
        aclose = getattr(self._chunks, "aclose", None)
        if aclose is not None:
            await aclose()

    async def _next_chunk(self) -> bytes | None:
        if isinstance(self._chunks, AsyncIterator):
            try:
                return await anext(self._chunks)
            except StopAsyncIteration:
                return None
        return next(self._chunks, None)
