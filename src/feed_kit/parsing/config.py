# src/feed_kit/parsing/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for FeedParser.

    Immutable. Explicit. No magic defaults from environment.
    """

    record_tag: str = "item"
    read_size: int = 8192
    max_read_size: int = 1024 * 1024
    max_empty_reads: int = 64
    empty_read_delay: float = 0.0  # Seconds to wait after a transient-empty read

    def __post_init__(self) -> None:
        if not self.record_tag or not self.record_tag.strip():
            raise ValueError("record_tag must be a non-empty tag name")
        if self.read_size <= 0:
            raise ValueError("read_size must be > 0")
        if self.max_read_size < self.read_size:
            raise ValueError("max_read_size must be >= read_size")
        if self.max_empty_reads <= 0:
            raise ValueError("max_empty_reads must be > 0")
        if self.empty_read_delay < 0:
            raise ValueError("empty_read_delay must be >= 0")
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "record_tag", self.record_tag.strip().lower())
