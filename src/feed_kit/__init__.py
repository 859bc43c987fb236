# Errors
from .errors import SourceError

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Parsing
from .parsing import (
    DictRecordStrategy,
    FeedParser,
    FunctionStrategy,
    ParserConfig,
    ParseState,
    RawNode,
    RecordStrategy,
    create_feed_parser,
)

# RSS
from .rss import RssItem, RssItemStrategy

# Sources
from .sources import (
    ByteSource,
    FileByteSource,
    HttpByteSource,
    IterableByteSource,
    SourceConfig,
    StreamByteSource,
    create_byte_source,
)

__all__ = [
    # Errors
    "SourceError",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsing
    "DictRecordStrategy",
    "FeedParser",
    "FunctionStrategy",
    "ParserConfig",
    "ParseState",
    "RawNode",
    "RecordStrategy",
    "create_feed_parser",
    # RSS
    "RssItem",
    "RssItemStrategy",
    # Sources
    "ByteSource",
    "FileByteSource",
    "HttpByteSource",
    "IterableByteSource",
    "SourceConfig",
    "StreamByteSource",
    "create_byte_source",
]
