"""Terminal interface: raw mode via termios, output sequences via Blessed."""

from __future__ import annotations

import logging
import os
import sys
import termios
from typing import Optional, Union

import blessed

from .constants import EditorConstants
from .cursor import Viewport
from .errors import TerminalError

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles raw terminal I/O."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 stdin=None, stdout=None,
                 read_size: int = EditorConstants.READ_INPUT_SIZE,
                 read_timeout: int = EditorConstants.READ_TIMEOUT_DECISECONDS):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.read_size = read_size
        self.read_timeout = read_timeout
        self.is_raw = False
        self._saved_attributes: Optional[list] = None

    @property
    def fd(self) -> int:
        return self.stdin.fileno()

    def setup(self):
        """Put stdin into raw mode and take over the screen.

        Raises:
            TerminalError: stdin is not a terminal or termios refused.
        """
        if not os.isatty(self.fd):
            raise TerminalError(EditorConstants.NOT_A_TERMINAL_MESSAGE)
        try:
            self._saved_attributes = termios.tcgetattr(self.fd)
        except termios.error as e:
            raise TerminalError(f"tcgetattr failed: {e}") from e

        attrs = termios.tcgetattr(self.fd)
        # Input flags: no break signal, keep CR as CR, 8 bit input, no flow control
        attrs[0] &= ~(termios.BRKINT | termios.ICRNL | termios.ISTRIP | termios.IXON)
        # Local flags: non-canonical, no echo, no signals, no LNEXT/DISCARD
        attrs[3] &= ~(termios.ICANON | termios.ISIG | termios.IEXTEN | termios.ECHO)
        # Reads return after VTIME deciseconds even with nothing typed
        cc = list(attrs[6])
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = self.read_timeout
        attrs[6] = cc
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError(f"tcsetattr failed: {e}") from e
        self.is_raw = True
        self.write(self.term.enter_fullscreen + self.term.clear)

    def cleanup(self):
        """Restore the saved terminal mode. Safe to call more than once."""
        if not self.is_raw:
            return
        self.is_raw = False
        self.write(self.term.exit_fullscreen + self.term.normal_cursor)
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved_attributes)
        except termios.error as e:
            logger.warning(f"Could not restore terminal attributes: {e}")

    def read_input(self) -> bytes:
        """Read up to ``read_size`` bytes; returns b'' when the read times out.

        Raises:
            TerminalError: the read itself failed.
        """
        try:
            return os.read(self.fd, self.read_size)
        except OSError as e:
            raise TerminalError(f"Failed to read the input byte: {e}") from e

    def query_viewport(self, previous: Viewport) -> Viewport:
        """Current window size, or ``previous`` if it cannot be determined."""
        try:
            size = os.get_terminal_size(self.fd)
        except OSError as e:
            logger.warning(f"Window size query failed, keeping {previous}: {e}")
            return previous
        if size.lines < 1 or size.columns < 1:
            logger.warning(f"Window size query returned {size}, keeping {previous}")
            return previous
        return Viewport(rows=size.lines, cols=size.columns)

    def write(self, data: Union[bytes, str]):
        """Write raw bytes (or an escape string) and flush."""
        if isinstance(data, str):
            data = data.encode('utf-8')
        out = getattr(self.stdout, 'buffer', self.stdout)
        out.write(data)
        out.flush()

    # --- Escape sequences ---

    @property
    def hide_cursor(self) -> str:
        return self.term.hide_cursor

    @property
    def show_cursor(self) -> str:
        return self.term.normal_cursor

    @property
    def top_left(self) -> str:
        return self.term.home

    @property
    def erase_line(self) -> str:
        return self.term.clear_eol

    def cursor_position(self, row: int, col: int) -> str:
        """Move to 0-based (row, col); the wire format is 1-based."""
        return self.term.move_yx(row, col)
