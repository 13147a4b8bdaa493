"""Coordinate mapping between the logical edit position and the screen cursor.

The edit position addresses the whole buffer. The screen cursor is what the
terminal is told, clamped to the viewport. Screen coordinates are clamped
first by the viewport bound, then by the matching edit coordinate, and never
go below zero. There is no scrolling: once the screen cursor reaches the
viewport edge it stays there while the edit position keeps moving.
"""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import LineBuffer
from .constants import EditorConstants


@dataclass
class EditPosition:
    row: int = 0
    col: int = 0


@dataclass
class ScreenCursor:
    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class Viewport:
    rows: int = EditorConstants.DEFAULT_VIEWPORT_ROWS
    cols: int = EditorConstants.DEFAULT_VIEWPORT_COLS

    @property
    def last_row(self) -> int:
        return max(self.rows, 1) - 1

    @property
    def last_col(self) -> int:
        return max(self.cols, 1) - 1


class CoordinateMapper:
    """Keeps EditPosition and ScreenCursor consistent across commands."""

    def __init__(self, buffer: LineBuffer, viewport: Viewport | None = None):
        self.buffer = buffer
        self.viewport = viewport or Viewport()
        self.edit = EditPosition()
        self.screen = ScreenCursor()

    def set_viewport(self, viewport: Viewport) -> None:
        """Adopt new geometry and pull the screen cursor back inside it."""
        self.viewport = viewport
        self.screen.row = max(min(self.screen.row, viewport.last_row, self.edit.row), 0)
        self.screen.col = max(min(self.screen.col, viewport.last_col, self.edit.col), 0)

    # --- Navigation ---

    def move_up(self) -> None:
        edit, screen = self.edit, self.screen
        edit.row = max(edit.row - 1, 0)
        edit.col = min(edit.col, self.buffer.content_length(edit.row))
        screen.row = max(screen.row - 1, 0)
        screen.col = min(screen.col, edit.col)

    def move_down(self) -> None:
        edit, screen = self.edit, self.screen
        edit.row = min(edit.row + 1, self.buffer.count - 1)
        edit.col = min(edit.col, self.buffer.content_length(edit.row))
        if screen.row >= self.viewport.last_row:
            screen.row = self.viewport.last_row
        elif screen.row >= edit.row:
            screen.row = edit.row
        else:
            screen.row += 1
        screen.col = min(screen.col, edit.col)

    def move_right(self) -> None:
        edit, screen = self.edit, self.screen
        edit.col = min(edit.col + 1, self.buffer.content_length(edit.row))
        if screen.col >= self.viewport.last_col:
            screen.col = self.viewport.last_col
        elif screen.col >= edit.col:
            screen.col = edit.col
        else:
            screen.col += 1

    def move_left(self) -> None:
        self.edit.col = max(self.edit.col - 1, 0)
        self.screen.col = max(self.screen.col - 1, 0)

    # --- Adjustments after buffer mutations ---

    def after_insert_char(self) -> None:
        self.edit.col += 1
        self.screen.col = min(self.screen.col + 1, self.viewport.last_col)

    def after_delete_char(self) -> None:
        self.edit.col -= 1
        self.screen.col = max(self.screen.col - 1, 0)

    def after_join(self, previous_length: int) -> None:
        """Land at the old end of the previous line."""
        self.edit.row -= 1
        self.edit.col = previous_length
        self.screen.row = max(self.screen.row - 1, 0)
        self.screen.col = min(self.edit.col, self.viewport.last_col)

    def after_split(self) -> None:
        self.edit.row += 1
        self.edit.col = 0
        self.screen.row = min(self.edit.row, self.viewport.last_row)
        self.screen.col = 0
