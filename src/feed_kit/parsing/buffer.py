# src/feed_kit/parsing/buffer.py

import asyncio
import logging

from feed_kit.observability import names
from feed_kit.observability.base import MetricsHook, NoOpMetricsHook
from feed_kit.sources.base import ByteSource

from .config import ParserConfig

logger = logging.getLogger(__name__)


class BufferManager:
    """Unconsumed byte window over a ByteSource.

    - Reads only when asked to (ensure), one read at a time
    - Read size grows geometrically while a token does not fit, resets on consume
    - Consumed bytes are compacted away; the unconsumed tail is never dropped

    The window is ``data[offset:]``. Callers scan it in place by offset
    rather than copying.
    """

    def __init__(
        self,
        source: ByteSource,
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._source = source
        self._config = config
        self.metrics_hook = metrics_hook
        self._data = bytearray()
        self._offset = 0
        self._eof = False
        self._read_size = config.read_size
        self._empty_reads = 0

    @property
    def data(self) -> bytearray:
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def at_eof(self) -> bool:
        return self._eof

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def consume(self, n: int) -> None:
        if n < 0 or n > self.remaining():
            raise ValueError(f"Cannot consume {n} bytes, {self.remaining()} remaining")
        self._offset += n
        self._read_size = self._config.read_size
        if self._offset and self._offset * 2 >= len(self._data):
            del self._data[: self._offset]
            self._offset = 0

    async def ensure(self, min_extra: int) -> bool:
        """Read once if fewer than ``min_extra`` unconsumed bytes are buffered.

        Returns True when new bytes were appended. Raises SourceError from the
        source unchanged.
        """
        if self._eof or self.remaining() >= min_extra:
            return False

        size = self._read_size
        self._read_size = min(self._read_size * 2, self._config.max_read_size)

        chunk = await self._source.read(size)
        self.metrics_hook.increment(names.SOURCE_READS_TOTAL)

        if chunk is None:
            logger.debug("End of input with %d unconsumed bytes", self.remaining())
            self._eof = True
            return False

        if not chunk:
            self._empty_reads += 1
            self.metrics_hook.increment(names.SOURCE_EMPTY_READS_TOTAL)
            if self._empty_reads >= self._config.max_empty_reads:
                logger.warning(
                    "No data after %d empty reads, treating input as ended "
                    "with %d unconsumed bytes",
                    self._empty_reads,
                    self.remaining(),
                )
                self._eof = True
                return False
            # Yield to the caller's scheduler before the next attempt
            await asyncio.sleep(self._config.empty_read_delay)
            return False

        self._empty_reads = 0
        self._data += chunk
        self.metrics_hook.increment(names.SOURCE_BYTES_READ, len(chunk))
        self.metrics_hook.record_gauge(names.PARSER_BUFFER_SIZE, len(self._data))
        return True
