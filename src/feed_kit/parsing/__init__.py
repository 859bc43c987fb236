# src/feed_kit/parsing/__init__.py

"""Incremental parsing engine.

Byte source -> BufferManager -> Tokenizer -> RecordAccumulator -> FeedParser.

Design principles:
- Pull-driven: bytes are read only when no token can be completed
- Bounded memory: consumed bytes are dropped as soon as they are tokenized
- Local recovery: malformed runs are skipped, never raised
- Small contract: next() yields a completed record or None

Example:
    >>> from feed_kit.parsing import FeedParser, DictRecordStrategy
    >>>
    >>> parser = await FeedParser.from_file("feed.xml", DictRecordStrategy())
    >>> async for record in parser:
    ...     print(record.get("title"))
"""

from .accumulator import RecordAccumulator
from .buffer import BufferManager
from .config import ParserConfig
from .engine import FeedParser
from .factory import create_feed_parser
from .models import (
    EndTag,
    Event,
    LiteralBlock,
    Malformed,
    ParseState,
    RawNode,
    StartTag,
    Text,
)
from .strategy import DictRecordStrategy, FunctionStrategy, RecordStrategy
from .tokenizer import Tokenizer

__all__ = [
    # Factory
    "create_feed_parser",
    # Engine
    "FeedParser",
    "BufferManager",
    "Tokenizer",
    "RecordAccumulator",
    # Config
    "ParserConfig",
    # Strategies
    "RecordStrategy",
    "FunctionStrategy",
    "DictRecordStrategy",
    # Types
    "RawNode",
    "ParseState",
    "Event",
    "StartTag",
    "EndTag",
    "Text",
    "LiteralBlock",
    "Malformed",
]
