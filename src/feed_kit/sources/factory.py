# src/feed_kit/sources/factory.py

from .base import ByteSource
from .config import SourceConfig


async def create_byte_source(config: SourceConfig) -> ByteSource:
    """Open the byte source described by ``config``.

    Raises:
        ValueError: If the kind is unknown or required settings are missing.
        SourceError: If the source cannot be opened.

    Example:
        >>> config = SourceConfig(kind="http", location="https://example.com/rss")
        >>> source = await create_byte_source(config)
    """
    if config.kind == "file":
        from .file import FileByteSource

        return await FileByteSource.open(config.location)

    if config.kind == "tcp":
        if config.port is None:
            raise ValueError("port is required for tcp sources")
        from .stream import StreamByteSource

        return await StreamByteSource.connect(
            config.location, config.port, timeout=config.timeout
        )

    if config.kind == "http":
        from .http import HttpByteSource

        return await HttpByteSource.open(
            config.location,
            timeout=config.timeout,
            max_retries=config.max_retries,
            headers=config.headers,
        )

    raise ValueError(f"Unknown source kind: {config.kind}")
