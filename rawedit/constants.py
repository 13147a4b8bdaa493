"""Constants and configuration for the rawedit editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Line buffer
    LINE_ENLARGE_SIZE = 128  # Capacity increment for the line collection

    # Input
    READ_INPUT_SIZE = 10  # Max bytes consumed per read
    READ_TIMEOUT_DECISECONDS = 1  # VTIME: how long a read waits before returning empty
    MAX_PENDING_ESCAPE = 16  # Longest incomplete escape sequence carried across reads

    # Control bytes
    EOT = 0x04  # Ctrl-D, stops the editor
    CR = 0x0d  # Enter, splits the line
    ESC = 0x1b
    CSI = 0x5b  # '[' following ESC
    DEL = 0x7f  # Backspace, deletes the char before the cursor

    # Viewport used until the first successful size query
    DEFAULT_VIEWPORT_ROWS = 24
    DEFAULT_VIEWPORT_COLS = 80

    # Rendering
    EMPTY_ROW_MARKER = b"~"  # Drawn for rows past the end of the buffer

    # Status messages
    USAGE_MESSAGE = "Usage: {} file"
    NOT_A_TERMINAL_MESSAGE = "Not a terminal."
