# src/feed_kit/parsing/models.py

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RawNode:
    """One fully parsed field element inside a record.

    Text and literal-block (CDATA) content are independently optional;
    when an element carries both, both are set.
    """

    tag: str
    text: str | None = None
    literal: str | None = None


class ParseState(str, Enum):
    """Where the parser is in the document."""

    SEEKING = "seeking"
    IN_RECORD = "in_record"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


# ----------------------------------------------------------------------------
# Lexical events
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class StartTag:
    name: str
    self_closing: bool = False


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class LiteralBlock:
    value: str


@dataclass(frozen=True)
class Malformed:
    """A byte run that could not be tokenized and was skipped."""

    raw: bytes


Event = StartTag | EndTag | Text | LiteralBlock | Malformed
