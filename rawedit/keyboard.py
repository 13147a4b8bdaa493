"""Keyboard input handling: raw terminal bytes to editor commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class CommandType(Enum):
    """Kinds of decoded commands."""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_RIGHT = "move_right"
    MOVE_LEFT = "move_left"
    INSERT_CHAR = "insert_char"
    DELETE_CHAR = "delete_char"
    SPLIT_LINE = "split_line"
    STOP = "stop"
    UNSUPPORTED = "unsupported"  # Escape sequence we do not handle


@dataclass(frozen=True)
class Command:
    """A decoded input command."""
    command_type: CommandType
    raw: bytes  # The bytes this command was decoded from
    value: Optional[int] = None  # Byte to insert, for INSERT_CHAR


ARROW_COMMANDS = {
    ord('A'): CommandType.MOVE_UP,
    ord('B'): CommandType.MOVE_DOWN,
    ord('C'): CommandType.MOVE_RIGHT,
    ord('D'): CommandType.MOVE_LEFT,
}


class InputDecoder:
    """Turns raw byte chunks into commands.

    An escape sequence may arrive split over several reads, so an
    incomplete one at the end of a chunk is held back and completed by
    the next chunk. ``flush`` resolves whatever is still pending once a
    read times out with no more input.
    """

    def __init__(self, max_pending: int = EditorConstants.MAX_PENDING_ESCAPE):
        self.max_pending = max_pending
        self._pending = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._pending)

    def decode(self, chunk: bytes) -> list[Command]:
        """Decode ``chunk`` (plus any pending bytes) left to right.

        Decoding stops at EOT; the rest of the chunk is ignored.
        """
        data = bytes(self._pending) + bytes(chunk)
        self._pending.clear()
        commands: list[Command] = []
        i = 0
        while i < len(data):
            byte = data[i]
            if byte == EditorConstants.EOT:
                commands.append(Command(CommandType.STOP, raw=data[i:i + 1]))
                break
            if byte == EditorConstants.ESC:
                consumed = self._decode_escape(data, i, commands)
                if consumed is None:
                    self._pending.extend(data[i:])
                    break
                i += consumed
                continue
            if byte == EditorConstants.DEL:
                commands.append(Command(CommandType.DELETE_CHAR, raw=data[i:i + 1]))
            elif byte == EditorConstants.CR:
                commands.append(Command(CommandType.SPLIT_LINE, raw=data[i:i + 1]))
            else:
                commands.append(Command(CommandType.INSERT_CHAR, raw=data[i:i + 1], value=byte))
            i += 1
        return commands

    def flush(self) -> list[Command]:
        """Resolve pending bytes after a read returned nothing.

        A lone ESC is a literal escape keypress and produces no command.
        A started but unfinished CSI sequence is reported as unsupported.
        """
        pending = bytes(self._pending)
        self._pending.clear()
        if len(pending) <= 1:
            return []
        return [Command(CommandType.UNSUPPORTED, raw=pending)]

    def _decode_escape(self, data: bytes, start: int,
                       commands: list[Command]) -> Optional[int]:
        """Decode the escape sequence at ``data[start]``.

        Returns the number of bytes consumed, or None if the sequence is
        incomplete and should wait for more input.
        """
        if start + 1 >= len(data):
            return None
        if data[start + 1] in (EditorConstants.ESC, EditorConstants.EOT):
            # Literal escape keypress followed by another key
            return 1
        if data[start + 1] != EditorConstants.CSI:
            raw = data[start:start + 2]
            logger.debug(f"Non-CSI control code: {raw!r}")
            commands.append(Command(CommandType.UNSUPPORTED, raw=raw))
            return 2

        # ECMA-48: parameter and intermediate bytes, then one final byte
        end = start + 2
        while end < len(data) and 0x20 <= data[end] <= 0x3f:
            end += 1
        if end >= len(data):
            if len(data) - start > self.max_pending:
                commands.append(Command(CommandType.UNSUPPORTED, raw=data[start:]))
                return len(data) - start
            return None
        if not 0x40 <= data[end] <= 0x7e:
            # Not a final byte; the sequence ends here and the byte after
            # it is decoded on its own
            raw = data[start:end]
            logger.debug(f"Interrupted escape sequence: {raw!r}")
            commands.append(Command(CommandType.UNSUPPORTED, raw=raw))
            return len(raw)

        raw = data[start:end + 1]
        command_type = ARROW_COMMANDS.get(data[end]) if end == start + 2 else None
        if command_type is None:
            logger.debug(f"Unrecognized escape sequence: {raw!r}")
            command_type = CommandType.UNSUPPORTED
        commands.append(Command(command_type, raw=raw))
        return len(raw)


class KeyboardHandler:
    """Reads raw chunks from the terminal and decodes them."""

    def __init__(self, terminal_interface, decoder: Optional[InputDecoder] = None):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface
        self.decoder = decoder or InputDecoder()

    def get_commands(self) -> list[Command]:
        """Block until at least one command is available.

        The terminal read returns empty after its timeout; that is not end
        of input, so the read is simply retried.
        """
        while True:
            chunk = self.terminal.read_input()
            if chunk:
                commands = self.decoder.decode(chunk)
            else:
                commands = self.decoder.flush()
            if commands:
                return commands
