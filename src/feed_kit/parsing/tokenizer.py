# src/feed_kit/parsing/tokenizer.py

"""Incremental markup tokenizer.

The tokenizer scans the unconsumed window of a BufferManager in place and
returns one lexical event at a time together with the number of bytes it
covers. It never consumes anything itself: when a token is not complete yet
it returns None and the caller reads more bytes and retries at the same
position.

Malformed input is skipped one unit at a time. A unit is a single tag (up to
its ``>``) or a run up to the next ``<``, so one bad fragment does not take
the rest of the feed with it.
"""

import re

from .models import EndTag, Event, LiteralBlock, Malformed, StartTag, Text

_CDATA_OPEN = b"<![CDATA["
_CDATA_CLOSE = b"]]>"
_COMMENT_OPEN = b"<!--"
_COMMENT_CLOSE = b"-->"

_NAME = rb"(?:[A-Za-z_:]|[\x80-\xff])(?:[-A-Za-z0-9_.:]|[\x80-\xff])*"

# Tag ends at the first ">" outside quotes. Attribute values cannot contain
# "<", so hitting one means the tag is broken.
_TAG_END = re.compile(rb"""[^"'<>]*(?:(?:"[^"<]*"|'[^'<]*')[^"'<>]*)*>""")
_START_TAG = re.compile(
    rb"<(" + _NAME + rb")"
    rb"""(?:\s+[^\s=/>"']+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?)*"""
    rb"\s*(/?)>"
)
_END_TAG = re.compile(rb"</(" + _NAME + rb")\s*>")
# <?target ...?>; a "<" before "?>" means the run is broken
_PI = re.compile(rb"<\?" + _NAME + rb"(?:\s[^<]*?)?\?>")
# <!DOCTYPE ...> with an optional [internal subset]. Outside the subset a "<"
# means the run is broken.
_DECLARATION = re.compile(rb"<!" + _NAME + rb"[^\[<>]*(?:\[[^\]]*\][^\[<>]*)?>")
_OPEN_SUBSET = re.compile(rb"<!" + _NAME + rb"[^\[<>]*\[[^\]]*")

# Only the predefined XML entities and numeric character references
_ENTITY = re.compile(r"&(?:(lt|gt|amp|quot|apos)|#([0-9]+)|#[xX]([0-9a-fA-F]+));")
_PREDEFINED = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "apos": "'"}

Token = tuple[Event | None, int]


class Tokenizer:
    """Turns buffered bytes into StartTag, EndTag, Text, LiteralBlock, Malformed.

    Tag names are lower-cased. Comments, processing instructions and
    declarations are consumed without an event (``(None, size)``).
    """

    def scan(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        """Return the next token starting at ``data[pos]``.

        Returns None when more bytes are needed. At end of input, None means
        the window is empty.
        """
        end = len(data)
        if pos >= end:
            return None

        if data[pos] != 0x3C:  # "<"
            return self._scan_text(data, pos, eof)

        if end - pos < 2:
            return self._need_more(data, pos, eof)

        second = data[pos + 1]
        if second == 0x21:  # "!"
            if _CDATA_OPEN.startswith(bytes(data[pos : pos + len(_CDATA_OPEN)])):
                if end - pos < len(_CDATA_OPEN):
                    return self._need_more(data, pos, eof)
                return self._scan_cdata(data, pos, eof)
            if _COMMENT_OPEN.startswith(bytes(data[pos : pos + len(_COMMENT_OPEN)])):
                if end - pos < len(_COMMENT_OPEN):
                    return self._need_more(data, pos, eof)
                return self._scan_until(data, pos, eof, _COMMENT_OPEN, _COMMENT_CLOSE)
            return self._scan_declaration(data, pos, eof)
        if second == 0x3F:  # "?"
            return self._scan_pi(data, pos, eof)
        return self._scan_tag(data, pos, eof)

    # ------------------------------------------------------------------------

    def _scan_text(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        stop = data.find(b"<", pos)
        if stop == -1:
            if not eof:
                return None
            stop = len(data)
        raw = bytes(data[pos:stop])
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError:
            return Malformed(raw), len(raw)
        return Text(_unescape(value)), len(raw)

    def _scan_cdata(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        body = pos + len(_CDATA_OPEN)
        close = data.find(_CDATA_CLOSE, body)
        if close == -1:
            return self._need_more(data, pos, eof)
        stop = close + len(_CDATA_CLOSE)
        try:
            value = bytes(data[body:close]).decode("utf-8")
        except UnicodeDecodeError:
            return Malformed(bytes(data[pos:stop])), stop - pos
        return LiteralBlock(value), stop - pos

    def _scan_until(
        self,
        data: bytes | bytearray,
        pos: int,
        eof: bool,
        opener: bytes,
        closer: bytes,
    ) -> Token | None:
        close = data.find(closer, pos + len(opener))
        if close == -1:
            return self._need_more(data, pos, eof)
        return None, close + len(closer) - pos

    def _scan_pi(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        match = _PI.match(data, pos)
        if match is None:
            return self._skip_run(data, pos, eof)
        return None, match.end() - pos

    def _scan_declaration(
        self, data: bytes | bytearray, pos: int, eof: bool
    ) -> Token | None:
        match = _DECLARATION.match(data, pos)
        if match is not None:
            return None, match.end() - pos
        subset = _OPEN_SUBSET.match(data, pos)
        if subset is not None and subset.end() == len(data):
            # Inside an unterminated [internal subset], which may contain "<"
            return self._need_more(data, pos, eof)
        return self._skip_run(data, pos, eof)

    def _scan_tag(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        match = _TAG_END.match(data, pos + 1)
        if match is None:
            return self._skip_run(data, pos, eof)

        stop = match.end()
        raw = bytes(data[pos:stop])
        if raw.startswith(b"</"):
            end_tag = _END_TAG.fullmatch(raw)
            if end_tag is None:
                return Malformed(raw), len(raw)
            return EndTag(_normalize(end_tag.group(1))), len(raw)

        start_tag = _START_TAG.fullmatch(raw)
        if start_tag is None:
            return Malformed(raw), len(raw)
        name = _normalize(start_tag.group(1))
        return StartTag(name, self_closing=bool(start_tag.group(2))), len(raw)

    def _skip_run(self, data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        """Broken markup: Malformed up to the next "<", once one is buffered."""
        nxt = data.find(b"<", pos + 1)
        if nxt != -1:
            return Malformed(bytes(data[pos:nxt])), nxt - pos
        return self._need_more(data, pos, eof)

    @staticmethod
    def _need_more(data: bytes | bytearray, pos: int, eof: bool) -> Token | None:
        if not eof:
            return None
        # Unterminated construct at end of input
        raw = bytes(data[pos:])
        return Malformed(raw), len(raw)


def _normalize(name: bytes) -> str:
    return name.decode("utf-8", errors="replace").lower()


def _unescape(text: str) -> str:
    return _ENTITY.sub(_expand, text) if "&" in text else text


def _expand(match: re.Match[str]) -> str:
    named, decimal, hexadecimal = match.groups()
    if named:
        return _PREDEFINED[named]
    code = int(decimal, 10) if decimal else int(hexadecimal, 16)
    if 0 < code <= 0x10FFFF:
        return chr(code)
    # Out of range; leave as written
    return match.group(0)
