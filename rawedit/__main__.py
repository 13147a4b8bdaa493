"""rawedit CLI entry point.

Allows running via `python -m rawedit FILE` and provides the console script
defined in `pyproject.toml`. The file is only read, never written back.
"""

from __future__ import annotations

import sys
from typing import Optional

from .version import get_version_string


def _fail(message: str) -> None:
    print(f"[!] {message}", file=sys.stderr)
    sys.exit(1)


def run_keyboard_test() -> None:
    """Print the decoded command for each key until Ctrl-D.

    Uses the editor's own TerminalInterface + KeyboardHandler, so what is
    shown is exactly what the editor would receive.
    """
    from .keyboard import CommandType, KeyboardHandler
    from .terminal import TerminalInterface

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        term.write("Keyboard test mode. Quit with Ctrl-D.\r\n")
        while True:
            for command in kb.get_commands():
                parts = [f"type={command.command_type.value}", f"raw={command.raw!r}"]
                if command.value is not None:
                    parts.append(f"value=0x{command.value:02x}")
                term.write(' '.join(parts) + "\r\n")
                if command.command_type == CommandType.STOP:
                    return
    finally:
        term.cleanup()


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    from .errors import RawEditError
    from .logging_config import setup_logging
    from .settings import load_settings

    if args and args[0] in ('--keytest', '--keyboard-test'):
        try:
            run_keyboard_test()
        except RawEditError as e:
            _fail(str(e))
        return

    if len(args) != 1:
        from .constants import EditorConstants
        print(EditorConstants.USAGE_MESSAGE.format("rawedit"), file=sys.stderr)
        sys.exit(1)

    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)

    # Lazy import to avoid importing terminal deps for --version
    from .editor import Editor
    editor = Editor(settings)
    try:
        editor.load_file(args[0])
    except OSError as e:
        _fail(f"Error loading file: {e}")
    try:
        editor.run()
    except RawEditError as e:
        _fail(str(e))


if __name__ == "__main__":  # pragma: no cover
    main()
