"""Command pattern implementation for editor actions."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING

from .errors import UnsupportedInputError
from .keyboard import CommandType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import Command

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', command: 'Command') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            command: The decoded input command that triggered this

        Returns:
            True if the command modified the buffer
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', command: 'Command') -> bool:
        """Movement commands don't modify the buffer."""
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""
        pass


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_down()


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_right()


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_left()


class InsertCharCommand(EditorCommand):
    def execute(self, editor, command):
        editor.model.insert_char(command.value)
        return True


class DeleteCharCommand(EditorCommand):
    def execute(self, editor, command):
        return editor.model.delete_char()


class SplitLineCommand(EditorCommand):
    def execute(self, editor, command):
        editor.model.split_line()
        return True


class StopCommand(EditorCommand):
    def execute(self, editor, command):
        editor.running = False
        return False


class UnsupportedInputCommand(EditorCommand):
    """Log and drop escape sequences the decoder did not recognize."""

    def execute(self, editor, command):
        if editor.settings.abort_on_unsupported_input:
            raise UnsupportedInputError(command.raw)
        logger.warning(f"Ignoring unsupported input {command.raw!r}")
        return False


class CommandRegistry:
    """Registry mapping decoded command types to editor commands."""

    def __init__(self):
        self._commands: Dict[CommandType, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register(CommandType.MOVE_UP, UpLineCommand())
        self.register(CommandType.MOVE_DOWN, DownLineCommand())
        self.register(CommandType.MOVE_RIGHT, RightCharCommand())
        self.register(CommandType.MOVE_LEFT, LeftCharCommand())

        # Editing commands
        self.register(CommandType.INSERT_CHAR, InsertCharCommand())
        self.register(CommandType.DELETE_CHAR, DeleteCharCommand())
        self.register(CommandType.SPLIT_LINE, SplitLineCommand())

        # System commands
        self.register(CommandType.STOP, StopCommand())
        self.register(CommandType.UNSUPPORTED, UnsupportedInputCommand())

    def register(self, command_type: CommandType, command: EditorCommand):
        """Register a command for a decoded command type."""
        self._commands[command_type] = command

    def get_command(self, command_type: CommandType) -> Optional[EditorCommand]:
        return self._commands.get(command_type)

    def execute(self, editor: 'Editor', command: 'Command') -> bool:
        """Execute the editor command for a decoded command.

        Returns:
            True if the buffer was modified
        """
        editor_command = self.get_command(command.command_type)
        if editor_command:
            return editor_command.execute(editor, command)
        return False
