"""Exceptions raised by the rawedit editor."""

from __future__ import annotations


class RawEditError(Exception):
    """Base class for all rawedit errors."""


class TerminalError(RawEditError):
    """The terminal could not be put into (or read in) raw mode.

    Always fatal: the editor cannot run without a working raw terminal.
    """


class BufferIndexError(RawEditError, IndexError):
    """A row or column outside the line buffer was addressed."""

    def __init__(self, message: str, row: int, col: int | None = None):
        super().__init__(message)
        self.row = row
        self.col = col


class UnsupportedInputError(RawEditError):
    """An escape sequence the decoder does not understand was received."""

    def __init__(self, raw: bytes):
        super().__init__(f"Unsupported escape sequence: {raw!r}")
        self.raw = raw
