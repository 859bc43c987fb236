# src/feed_kit/errors.py


class SourceError(OSError):
    """A byte source failed (I/O failure, connection reset, bad HTTP status).

    Raised by constructors when a source cannot be opened. While pulling,
    the parser catches it and ends the sequence instead.
    """
