"""Line buffer: the in-memory lines of the file being edited.

Every line stores its visible content as an owned ``bytearray`` plus a flag
recording whether the line ends with a newline. Bytes are opaque; nothing
is decoded. The buffer tracks a logical capacity that grows in fixed
increments, and always holds at least one line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .constants import EditorConstants
from .errors import BufferIndexError

logger = logging.getLogger(__name__)


@dataclass
class Line:
    """One line of the buffer."""
    content: bytearray = field(default_factory=bytearray)
    newline: bool = True  # False only for a last line read without one

    @property
    def content_length(self) -> int:
        return len(self.content)

    @property
    def stored_length(self) -> int:
        """Content length plus the newline and terminator slots."""
        return len(self.content) + 2

    def to_bytes(self) -> bytes:
        return bytes(self.content) + (b"\n" if self.newline else b"")


class LineBuffer:
    """Ordered, index-addressed collection of lines.

    Invariant: ``1 <= count <= capacity`` and capacity is a multiple of
    the enlarge increment.
    """

    def __init__(self, lines: Optional[list[Line]] = None,
                 enlarge_size: int = EditorConstants.LINE_ENLARGE_SIZE):
        if enlarge_size < 1:
            raise ValueError(f"enlarge_size must be positive, got {enlarge_size}")
        self.enlarge_size = enlarge_size
        self._lines: list[Line] = []
        self._capacity = enlarge_size
        if lines is None:
            lines = [Line()]
        elif not lines:
            raise ValueError("A line buffer needs at least one line")
        for line in lines:
            self._append(line)

    @classmethod
    def load(cls, path: str,
             enlarge_size: int = EditorConstants.LINE_ENLARGE_SIZE) -> "LineBuffer":
        """Read ``path`` into a new buffer.

        A missing file yields a buffer of exactly one empty line. Any other
        OS error propagates.
        """
        lines: list[Line] = []
        try:
            with open(path, 'rb') as f:
                for raw in f:
                    if raw.endswith(b"\n"):
                        lines.append(Line(bytearray(raw[:-1]), newline=True))
                    else:
                        lines.append(Line(bytearray(raw), newline=False))
        except FileNotFoundError:
            logger.info(f"{path} does not exist, starting with an empty buffer")
        if not lines:
            lines.append(Line())
        buffer = cls(lines=lines, enlarge_size=enlarge_size)
        logger.debug(f"Loaded {buffer.count} lines from {path} (capacity {buffer.capacity})")
        return buffer

    # --- Accessors ---

    @property
    def count(self) -> int:
        return len(self._lines)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._lines)

    def lines(self) -> Iterator[Line]:
        return iter(self._lines)

    def line(self, row: int) -> Line:
        self._check_row(row)
        return self._lines[row]

    def line_bytes(self, row: int) -> bytes:
        """Visible content of ``row`` without its newline."""
        return bytes(self.line(row).content)

    def content_length(self, row: int) -> int:
        return self.line(row).content_length

    def to_bytes(self) -> bytes:
        return b"".join(line.to_bytes() for line in self._lines)

    # --- Mutations ---

    def insert_char(self, row: int, col: int, byte: int) -> None:
        """Insert ``byte`` at ``col``, shifting the rest of the line right."""
        line = self.line(row)
        self._check_col(row, col, line)
        if not 0 <= byte <= 0xff:
            raise ValueError(f"Not a byte value: {byte}")
        line.content.insert(col, byte)

    def delete_char(self, row: int, col: int) -> None:
        """Remove the byte just before ``col``.

        Column 0 has nothing before it; callers route that case to
        :meth:`join_with_previous`.
        """
        line = self.line(row)
        self._check_col(row, col, line)
        if col == 0:
            raise BufferIndexError("Cannot delete before column 0", row, col)
        del line.content[col - 1]

    def split_line(self, row: int, col: int) -> None:
        """Break ``row`` at ``col``; the tail becomes a new line at ``row + 1``."""
        line = self.line(row)
        self._check_col(row, col, line)
        self._ensure_capacity(self.count + 1)
        tail = Line(line.content[col:], newline=line.newline)
        del line.content[col:]
        line.newline = True
        self._lines.insert(row + 1, tail)

    def join_with_previous(self, row: int) -> int:
        """Append ``row`` onto ``row - 1`` and remove it.

        Returns:
            The content length the previous line had before the join.
        """
        line = self.line(row)
        if row == 0:
            raise BufferIndexError("First line has no previous line", row)
        previous = self._lines[row - 1]
        previous_length = previous.content_length
        previous.content.extend(line.content)
        previous.newline = line.newline
        del self._lines[row]
        return previous_length

    def release(self) -> None:
        """Drop every line and the collection itself."""
        for line in self._lines:
            line.content.clear()
        self._lines.clear()
        self._capacity = 0

    # --- Internal helpers ---

    def _append(self, line: Line) -> None:
        self._ensure_capacity(self.count + 1)
        self._lines.append(line)

    def _ensure_capacity(self, needed: int) -> None:
        while needed > self._capacity:
            self._capacity += self.enlarge_size
            logger.debug(f"Line buffer grown to capacity {self._capacity}")

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._lines):
            raise BufferIndexError(
                f"Row {row} out of range (count {len(self._lines)})", row)

    def _check_col(self, row: int, col: int, line: Line) -> None:
        if not 0 <= col <= line.content_length:
            raise BufferIndexError(
                f"Column {col} out of range for row {row} "
                f"(length {line.content_length})", row, col)
