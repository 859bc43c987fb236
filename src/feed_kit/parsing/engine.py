# src/feed_kit/parsing/engine.py

import inspect
import logging
from collections.abc import AsyncIterator
from pathlib import Path
from time import monotonic
from types import TracebackType
from typing import Any, BinaryIO, Generic, TypeVar

from feed_kit.errors import SourceError
from feed_kit.observability import names
from feed_kit.observability.base import MetricsHook, NoOpMetricsHook
from feed_kit.sources.base import ByteSource
from feed_kit.sources.file import FileByteSource
from feed_kit.sources.http import HttpByteSource
from feed_kit.sources.stream import AsyncReader, StreamByteSource

from .accumulator import RecordAccumulator
from .buffer import BufferManager
from .config import ParserConfig
from .models import Malformed, ParseState
from .strategy import RecordStrategy
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeedParser(Generic[T]):
    """Incremental record extractor over a byte source.

    Pull one record at a time with ``await parser.next()`` or iterate with
    ``async for``. Bytes are read only when the tokenizer cannot make
    progress, so memory stays bounded by the largest single token.

    Not restartable: once ``next()`` returns None it keeps returning None.
    One parser has one driver; concurrent ``next()`` calls raise RuntimeError.

    Example:
        >>> parser = await FeedParser.from_file("feed.xml", RssItemStrategy())
        >>> async with parser:
        ...     async for item in parser:
        ...         print(item.title)
    """

    def __init__(
        self,
        source: ByteSource,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        *,
        owns_source: bool = False,
    ) -> None:
        self._source = source
        self._owns_source = owns_source
        self._config = config
        self.metrics_hook = metrics_hook
        self._buffer = BufferManager(source, config, metrics_hook)
        self._tokenizer = Tokenizer()
        self._accumulator: RecordAccumulator[T] = RecordAccumulator(
            config.record_tag, strategy
        )
        self._done: ParseState | None = None
        self._pulling = False
        logger.info(
            "Initialized FeedParser with record_tag=%s, read_size=%d, source=%s",
            config.record_tag,
            config.read_size,
            type(source).__name__,
        )

    # ------------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------------

    @classmethod
    def from_reader(
        cls,
        handle: AsyncReader | BinaryIO,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "FeedParser[T]":
        """Bind to any byte-readable handle, async (``await read(n)``) or blocking.

        The handle stays owned by the caller.
        """
        source: ByteSource
        if _is_async_reader(handle):
            source = StreamByteSource(handle)  # type: ignore[arg-type]
        else:
            source = FileByteSource(handle)  # type: ignore[arg-type]
        return cls(source, strategy, config, metrics_hook)

    @classmethod
    def from_stream(
        cls,
        reader: AsyncReader,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "FeedParser[T]":
        """Bind to the read side of an already open connection."""
        return cls(StreamByteSource(reader), strategy, config, metrics_hook)

    @classmethod
    async def from_file(
        cls,
        path: str | Path,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "FeedParser[T]":
        """Open ``path`` and bind to it. Raises SourceError if it cannot be opened."""
        source = await FileByteSource.open(path)
        return cls(source, strategy, config, metrics_hook, owns_source=True)

    @classmethod
    async def from_tcp(
        cls,
        host: str,
        port: int,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        *,
        timeout: float | None = 30.0,
    ) -> "FeedParser[T]":
        """Connect to ``host:port`` and bind to the connection's byte stream."""
        source = await StreamByteSource.connect(host, port, timeout=timeout)
        return cls(source, strategy, config, metrics_hook, owns_source=True)

    @classmethod
    async def from_url(
        cls,
        url: str,
        strategy: RecordStrategy[T],
        config: ParserConfig = ParserConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        **http_options: Any,
    ) -> "FeedParser[T]":
        """GET ``url`` and bind to the response body.

        ``http_options`` are passed to HttpByteSource.open (timeout,
        max_retries, headers, client).
        """
        source = await HttpByteSource.open(url, **http_options)
        return cls(source, strategy, config, metrics_hook, owns_source=True)

    # ------------------------------------------------------------------------
    # Pulling
    # ------------------------------------------------------------------------

    @property
    def state(self) -> ParseState:
        if self._done is not None:
            return self._done
        return self._accumulator.state

    async def next(self) -> T | None:
        """Return the next completed record, or None when there are no more."""
        if self._done is not None:
            return None
        if self._pulling:
            raise RuntimeError("FeedParser.next() is already running")

        self._pulling = True
        start = monotonic()
        try:
            record = await self._pull()
        except SourceError as exc:
            logger.warning("Byte source failed, ending feed: %s", exc)
            self.metrics_hook.increment(names.SOURCE_ERRORS_TOTAL)
            self._fail()
            return None
        except BaseException:
            # Strategy errors and cancellation leave the pipeline unusable
            self._fail()
            raise
        finally:
            self._pulling = False

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.PARSER_PULL_DURATION, elapsed_ms)
        if record is not None:
            self.metrics_hook.increment(names.PARSER_RECORDS_TOTAL)
        return record

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        record = await self.next()
        if record is None:
            raise StopAsyncIteration
        return record

    async def _pull(self) -> T | None:
        buffer = self._buffer
        while True:
            token = self._tokenizer.scan(buffer.data, buffer.offset, buffer.at_eof)
            if token is None:
                if buffer.at_eof:
                    self._exhaust()
                    return None
                await buffer.ensure(buffer.remaining() + 1)
                continue

            event, size = token
            buffer.consume(size)
            if event is None:
                continue
            if isinstance(event, Malformed):
                logger.debug("Skipping %d malformed bytes: %r", size, event.raw[:64])
                self.metrics_hook.increment(names.PARSER_MALFORMED_TOTAL)
                continue

            record = self._accumulator.feed(event)
            if record is not None:
                logger.debug("Completed <%s> record", self._config.record_tag)
                return record

    def _exhaust(self) -> None:
        if self._accumulator.in_record:
            self.metrics_hook.increment(names.PARSER_RECORDS_DISCARDED)
        self._accumulator.finish()
        self._done = ParseState.EXHAUSTED
        logger.info("Feed exhausted")

    def _fail(self) -> None:
        if self._accumulator.in_record:
            self.metrics_hook.increment(names.PARSER_RECORDS_DISCARDED)
        self._accumulator.reset()
        self._done = ParseState.FAILED

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    async def aclose(self) -> None:
        """Stop parsing. Closes the source only if a constructor opened it."""
        if self._done is None:
            self._accumulator.reset()
            self._done = ParseState.EXHAUSTED
        if self._owns_source:
            self._owns_source = False
            await self._source.close()

    async def __aenter__(self) -> "FeedParser[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _is_async_reader(handle: Any) -> bool:
    read = getattr(handle, "read", None)
    return read is not None and inspect.iscoroutinefunction(read)
