# src/feed_kit/parsing/strategy.py

from collections.abc import Callable, Iterable
from typing import Generic, Protocol, TypeVar

from .models import RawNode

T = TypeVar("T")


class RecordStrategy(Protocol[T]):
    """Per-record customization point.

    Design principles:
    - init() returns a fresh, zero-valued record for every record element
    - populate() mutates that record in place, one field node at a time
    - Unrecognized tags are silently ignored by convention
    """

    def init(self) -> T: ...

    def populate(self, record: T, node: RawNode) -> None: ...


class FunctionStrategy(Generic[T]):
    """Strategy built from a pair of callables.

    Example:
        >>> strategy = FunctionStrategy(init=dict, populate=lambda r, n: ...)
    """

    def __init__(
        self,
        *,
        init: Callable[[], T],
        populate: Callable[[T, RawNode], None],
    ) -> None:
        self._init = init
        self._populate = populate

    def init(self) -> T:
        return self._init()

    def populate(self, record: T, node: RawNode) -> None:
        self._populate(record, node)


class DictRecordStrategy:
    """Collects fields into a plain dict keyed by lower-cased tag.

    Value is the node text, falling back to the literal block. When
    ``fields`` is given, other tags are ignored. Later occurrences of a
    tag overwrite earlier ones.
    """

    def __init__(self, fields: Iterable[str] | None = None) -> None:
        self._fields = (
            frozenset(f.lower() for f in fields) if fields is not None else None
        )

    def init(self) -> dict[str, str]:
        return {}

    def populate(self, record: dict[str, str], node: RawNode) -> None:
        if self._fields is not None and node.tag not in self._fields:
            return
        value = node.text if node.text is not None else node.literal
        if value is not None:
            record[node.tag] = value
