# src/feed_kit/sources/base.py

from typing import Protocol


class ByteSource(Protocol):
    """Uniform "read more bytes, maybe none yet" contract.

    read() returns:
    - non-empty bytes: data, the source cursor advanced
    - b"": nothing available yet (transient-empty), try again later
    - None: end of input

    Failures raise SourceError. Exactly one read may be outstanding at a time.
    """

    async def read(self, size: int) -> bytes | None: ...

    async def close(self) -> None: ...
