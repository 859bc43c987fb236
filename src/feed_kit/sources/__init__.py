from .base import ByteSource
from .config import SourceConfig
from .factory import create_byte_source
from .file import FileByteSource
from .http import HttpByteSource
from .iterable import IterableByteSource
from .stream import StreamByteSource

__all__ = [
    # Factory
    "create_byte_source",
    # Protocol
    "ByteSource",
    # Config
    "SourceConfig",
    # Adapters
    "FileByteSource",
    "HttpByteSource",
    "IterableByteSource",
    "StreamByteSource",
]
