"""Editor state: the line buffer plus the cursor coordinates."""

from __future__ import annotations

from typing import Optional

from .buffer import LineBuffer
from .cursor import CoordinateMapper, EditPosition, ScreenCursor, Viewport


class EditorModel:
    """Explicit editor state owned by the driver.

    Each editing method mutates the buffer first, then lets the
    coordinate mapper move the edit position and screen cursor.
    """

    def __init__(self, buffer: Optional[LineBuffer] = None,
                 viewport: Optional[Viewport] = None):
        self.buffer = buffer if buffer is not None else LineBuffer()
        self.mapper = CoordinateMapper(self.buffer, viewport)

    @property
    def edit_position(self) -> EditPosition:
        return self.mapper.edit

    @property
    def screen_cursor(self) -> ScreenCursor:
        return self.mapper.screen

    @property
    def viewport(self) -> Viewport:
        return self.mapper.viewport

    def set_viewport(self, viewport: Viewport) -> None:
        self.mapper.set_viewport(viewport)

    def move_up(self):
        self.mapper.move_up()

    def move_down(self):
        self.mapper.move_down()

    def move_left(self):
        self.mapper.move_left()

    def move_right(self):
        self.mapper.move_right()

    def insert_char(self, byte: int):
        pos = self.mapper.edit
        self.buffer.insert_char(pos.row, pos.col, byte)
        self.mapper.after_insert_char()

    def delete_char(self) -> bool:
        """Delete the byte before the cursor, joining lines at column 0.

        Returns:
            False when at the very start of the buffer (nothing deleted).
        """
        pos = self.mapper.edit
        if pos.col > 0:
            self.buffer.delete_char(pos.row, pos.col)
            self.mapper.after_delete_char()
            return True
        if pos.row == 0:
            return False
        previous_length = self.buffer.join_with_previous(pos.row)
        self.mapper.after_join(previous_length)
        return True

    def split_line(self):
        pos = self.mapper.edit
        self.buffer.split_line(pos.row, pos.col)
        self.mapper.after_split()
