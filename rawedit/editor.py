"""Main editor controller: the decode, mutate, render loop.

The editor never writes the file it loaded. There is no save command and
no save path; edits live only as long as the session.
"""

import logging
from typing import Optional

from .buffer import LineBuffer
from .commands import CommandRegistry
from .keyboard import InputDecoder, KeyboardHandler
from .model import EditorModel
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import TerminalTextView

logger = logging.getLogger(__name__)


class Editor:
    """Raw-mode editor application controller."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface(
            read_size=self.settings.read_size,
            read_timeout=self.settings.read_timeout_deciseconds,
        )
        self.keyboard = KeyboardHandler(self.terminal, InputDecoder())
        self.view = TerminalTextView(self.terminal)
        self.model = EditorModel(LineBuffer(enlarge_size=self.settings.line_enlarge_size))
        self.command_registry = CommandRegistry()
        self.filename: Optional[str] = None
        self.modified = False
        self.running = False

    def load_file(self, filename: str):
        """Load a file into the editor; a missing file starts an empty buffer.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        buffer = LineBuffer.load(filename, enlarge_size=self.settings.line_enlarge_size)
        self.model = EditorModel(buffer, self.model.viewport)
        self.modified = False

    def refresh_viewport(self):
        """Re-read the window size; failures keep the previous geometry."""
        self.model.set_viewport(self.terminal.query_viewport(self.model.viewport))

    def run(self):
        """Run the main editor loop until a stop command.

        Raises:
            TerminalError: raw mode could not be set up or input failed.
            UnsupportedInputError: an unknown escape arrived while
                ``abort_on_unsupported_input`` is set.
        """
        self.terminal.setup()
        self.running = True
        try:
            self.refresh_viewport()
            self.view.render(self.model)
            while self.running:
                for command in self.keyboard.get_commands():
                    self.handle_command(command)
                    if not self.running:
                        break
                self.refresh_viewport()
                self.view.render(self.model)
        finally:
            self.running = False
            self.terminal.cleanup()
            self.model.buffer.release()
            if self.modified:
                logger.info(f"Discarding unsaved edits to {self.filename}")

    def handle_command(self, command):
        """Apply one decoded command to the editor state."""
        if self.command_registry.execute(self, command):
            self.modified = True
