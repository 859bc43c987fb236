# src/feed_kit/sources/config.py

from dataclasses import dataclass
from typing import Literal

SourceKind = Literal["file", "tcp", "http"]


@dataclass(frozen=True)
class SourceConfig:
    """Where feed bytes come from.

    location is a filesystem path, a host name, or a URL depending on kind.
    """

    kind: SourceKind
    location: str
    port: int | None = None  # Required when kind="tcp"
    timeout: float = 30.0
    max_retries: int = 3  # HTTP only: transport-error attempts while opening
    headers: dict[str, str] | None = None
