# src/feed_kit/parsing/accumulator.py

import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar, cast

from .models import (
    EndTag,
    Event,
    LiteralBlock,
    ParseState,
    RawNode,
    StartTag,
    Text,
)
from .strategy import RecordStrategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _OpenField:
    tag: str
    text: list[str] = field(default_factory=list)
    literal: list[str] = field(default_factory=list)

    def to_node(self) -> RawNode:
        text = "".join(self.text)
        return RawNode(
            tag=self.tag,
            text=text if text.strip() else None,
            literal="".join(self.literal) if self.literal else None,
        )


class RecordAccumulator(Generic[T]):
    """State machine over SEEKING / IN_RECORD.

    Only a record tag seen while SEEKING opens a record. Inside a record,
    elements with the same name are ordinary fields; the record closes on a
    record-tag EndTag that matches no open field.
    """

    def __init__(self, record_tag: str, strategy: RecordStrategy[T]) -> None:
        self._record_tag = record_tag.lower()
        self._strategy = strategy
        self._record: T | None = None
        self._open: list[_OpenField] = []
        self.state = ParseState.SEEKING

    @property
    def in_record(self) -> bool:
        return self.state is ParseState.IN_RECORD

    def feed(self, event: Event) -> T | None:
        """Apply one event. Returns the record when its closing tag arrives."""
        if self.state is ParseState.SEEKING:
            if isinstance(event, StartTag) and event.name == self._record_tag:
                self._record = self._strategy.init()
                self.state = ParseState.IN_RECORD
                if event.self_closing:
                    return self._complete()
            return None

        if isinstance(event, StartTag):
            if event.self_closing:
                self._deliver(_OpenField(event.name))
            else:
                self._open.append(_OpenField(event.name))
        elif isinstance(event, EndTag):
            return self._close(event.name)
        elif isinstance(event, Text):
            if self._open:
                self._open[-1].text.append(event.value)
        elif isinstance(event, LiteralBlock):
            if self._open:
                self._open[-1].literal.append(event.value)
        return None

    def finish(self) -> None:
        """End of input. A record still in progress is discarded."""
        if self.state is ParseState.IN_RECORD:
            logger.debug(
                "Input ended inside <%s>, discarding partial record with %d open fields",
                self._record_tag,
                len(self._open),
            )
        self.reset()

    def reset(self) -> None:
        self._record = None
        self._open.clear()
        self.state = ParseState.SEEKING

    # ------------------------------------------------------------------------

    def _close(self, name: str) -> T | None:
        for depth in range(len(self._open) - 1, -1, -1):
            if self._open[depth].tag == name:
                dropped = self._open[depth + 1 :]
                if dropped:
                    logger.debug(
                        "Dropping unclosed fields %s inside <%s>",
                        [f.tag for f in dropped],
                        name,
                    )
                node = self._open[depth]
                del self._open[depth:]
                self._deliver(node)
                return None

        if name == self._record_tag:
            return self._complete()

        logger.debug("Ignoring stray </%s>", name)
        return None

    def _deliver(self, open_field: _OpenField) -> None:
        self._strategy.populate(cast(T, self._record), open_field.to_node())

    def _complete(self) -> T:
        record = cast(T, self._record)
        if self._open:
            logger.debug(
                "Record closed with unclosed fields %s", [f.tag for f in self._open]
            )
        self.reset()
        return record
