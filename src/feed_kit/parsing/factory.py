# src/feed_kit/parsing/factory.py

from typing import TypeVar

from feed_kit.observability.base import MetricsHook, NoOpMetricsHook
from feed_kit.sources.config import SourceConfig
from feed_kit.sources.factory import create_byte_source

from .config import ParserConfig
from .engine import FeedParser
from .strategy import RecordStrategy

T = TypeVar("T")


async def create_feed_parser(
    source_config: SourceConfig,
    strategy: RecordStrategy[T],
    parser_config: ParserConfig = ParserConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> FeedParser[T]:
    """Open a source from config and bind a parser to it.

    The parser owns the source; close it with ``aclose()`` or ``async with``.

    Raises:
        ValueError: If the source config is invalid.
        SourceError: If the source cannot be opened.

    Example:
        >>> config = SourceConfig(kind="file", location="feed.xml")
        >>> parser = await create_feed_parser(config, RssItemStrategy())
    """
    source = await create_byte_source(source_config)
    return FeedParser(
        source, strategy, parser_config, metrics_hook, owns_source=True
    )
