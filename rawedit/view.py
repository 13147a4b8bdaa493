"""Full-screen rendering of the line buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .model import EditorModel
    from .terminal import TerminalInterface


class TerminalTextView:
    """Draws the first ``viewport.rows`` lines of the buffer.

    There is no scrolling. Rows past the end of the buffer show a tilde and
    line content past the viewport width is cut off.
    """

    def __init__(self, terminal: 'TerminalInterface'):
        self.terminal = terminal

    def compose(self, model: 'EditorModel') -> bytes:
        """Build the bytes of one complete frame."""
        term = self.terminal
        viewport = model.viewport
        frame = bytearray()
        frame += term.hide_cursor.encode('utf-8')
        frame += term.top_left.encode('utf-8')
        for row in range(max(viewport.rows, 1)):
            frame += term.cursor_position(row, 0).encode('utf-8')
            frame += term.erase_line.encode('utf-8')
            if row < model.buffer.count:
                frame += model.buffer.line_bytes(row)[:viewport.cols]
            else:
                frame += EditorConstants.EMPTY_ROW_MARKER
        cursor = model.screen_cursor
        frame += term.cursor_position(cursor.row, cursor.col).encode('utf-8')
        frame += term.show_cursor.encode('utf-8')
        return bytes(frame)

    def render(self, model: 'EditorModel'):
        self.terminal.write(self.compose(model))
