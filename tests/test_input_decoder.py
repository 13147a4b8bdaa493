"""Test decoding of raw input bytes into editor commands."""

from unittest.mock import Mock

import pytest

from rawedit.errors import TerminalError
from rawedit.keyboard import Command, CommandType, InputDecoder, KeyboardHandler


def types(commands):
    return [c.command_type for c in commands]


def test_plain_bytes_insert():
    commands = InputDecoder().decode(b"hi\t")
    assert types(commands) == [CommandType.INSERT_CHAR] * 3
    assert [c.value for c in commands] == [ord('h'), ord('i'), ord('\t')]


def test_non_ascii_bytes_insert_verbatim():
    commands = InputDecoder().decode("é".encode('utf-8'))
    assert [c.value for c in commands] == [0xc3, 0xa9]


@pytest.mark.parametrize("letter,expected", [
    (b"A", CommandType.MOVE_UP),
    (b"B", CommandType.MOVE_DOWN),
    (b"C", CommandType.MOVE_RIGHT),
    (b"D", CommandType.MOVE_LEFT),
])
def test_arrow_keys(letter, expected):
    commands = InputDecoder().decode(b"\x1b[" + letter)
    assert len(commands) == 1
    assert commands[0].command_type == expected
    assert commands[0].raw == b"\x1b[" + letter


def test_control_bytes():
    commands = InputDecoder().decode(b"\x7f\x0d")
    assert types(commands) == [CommandType.DELETE_CHAR, CommandType.SPLIT_LINE]


def test_mixed_chunk_left_to_right():
    commands = InputDecoder().decode(b"a\x1b[Db\r")
    assert types(commands) == [
        CommandType.INSERT_CHAR,
        CommandType.MOVE_LEFT,
        CommandType.INSERT_CHAR,
        CommandType.SPLIT_LINE,
    ]


def test_eot_stops_and_ignores_rest():
    decoder = InputDecoder()
    commands = decoder.decode(b"a\x04bc\x1b")
    assert types(commands) == [CommandType.INSERT_CHAR, CommandType.STOP]
    assert decoder.pending == b""


def test_trailing_escape_waits_for_next_chunk():
    """An arrow key split across two reads is still an arrow key."""
    decoder = InputDecoder()
    assert decoder.decode(b"x\x1b") == [
        Command(CommandType.INSERT_CHAR, raw=b"x", value=ord('x'))
    ]
    assert decoder.pending == b"\x1b"
    commands = decoder.decode(b"[A")
    assert types(commands) == [CommandType.MOVE_UP]
    assert commands[0].raw == b"\x1b[A"
    assert decoder.pending == b""


def test_csi_split_after_bracket():
    decoder = InputDecoder()
    assert decoder.decode(b"\x1b[") == []
    assert types(decoder.decode(b"Cz")) == [CommandType.MOVE_RIGHT, CommandType.INSERT_CHAR]


def test_flush_discards_lone_escape():
    """A lone ESC with nothing following is a literal escape, no command."""
    decoder = InputDecoder()
    decoder.decode(b"\x1b")
    assert decoder.flush() == []
    assert decoder.pending == b""
    assert types(decoder.decode(b"[A")) == [CommandType.INSERT_CHAR] * 2


def test_flush_reports_unfinished_csi():
    decoder = InputDecoder()
    decoder.decode(b"\x1b[1;")
    commands = decoder.flush()
    assert types(commands) == [CommandType.UNSUPPORTED]
    assert commands[0].raw == b"\x1b[1;"


def test_flush_with_nothing_pending():
    assert InputDecoder().flush() == []


def test_unrecognized_csi_is_unsupported():
    commands = InputDecoder().decode(b"\x1b[Hx")
    assert types(commands) == [CommandType.UNSUPPORTED, CommandType.INSERT_CHAR]
    assert commands[0].raw == b"\x1b[H"


def test_parameterized_csi_is_consumed_whole():
    """Keys like Delete (ESC [ 3 ~) do not leak digits into the text."""
    commands = InputDecoder().decode(b"\x1b[3~\x1b[1;5C")
    assert types(commands) == [CommandType.UNSUPPORTED, CommandType.UNSUPPORTED]
    assert [c.raw for c in commands] == [b"\x1b[3~", b"\x1b[1;5C"]


def test_non_csi_escape_is_unsupported():
    commands = InputDecoder().decode(b"\x1bOPa")
    assert types(commands) == [
        CommandType.UNSUPPORTED,
        CommandType.INSERT_CHAR,
        CommandType.INSERT_CHAR,
    ]
    assert commands[0].raw == b"\x1bO"


def test_double_escape_drops_first():
    commands = InputDecoder().decode(b"\x1b\x1b[B")
    assert types(commands) == [CommandType.MOVE_DOWN]


def test_overlong_pending_escape_is_unsupported():
    decoder = InputDecoder(max_pending=4)
    commands = decoder.decode(b"\x1b[1;2;3")
    assert types(commands) == [CommandType.UNSUPPORTED]
    assert decoder.pending == b""


def test_keyboard_handler_retries_empty_reads():
    """A zero-length read is a timeout, not end of input."""
    terminal = Mock()
    terminal.read_input.side_effect = [b"", b"", b"q"]
    handler = KeyboardHandler(terminal)
    commands = handler.get_commands()
    assert types(commands) == [CommandType.INSERT_CHAR]
    assert terminal.read_input.call_count == 3


def test_keyboard_handler_waits_out_lone_escape():
    """ESC then a timeout produces nothing; reading continues."""
    terminal = Mock()
    terminal.read_input.side_effect = [b"\x1b", b"", b"\x7f"]
    handler = KeyboardHandler(terminal)
    assert types(handler.get_commands()) == [CommandType.DELETE_CHAR]


def test_keyboard_handler_joins_split_sequence():
    terminal = Mock()
    terminal.read_input.side_effect = [b"\x1b", b"[D"]
    handler = KeyboardHandler(terminal)
    assert types(handler.get_commands()) == [CommandType.MOVE_LEFT]


def test_keyboard_handler_propagates_read_failure():
    terminal = Mock()
    terminal.read_input.side_effect = TerminalError("Failed to read the input byte")
    handler = KeyboardHandler(terminal)
    with pytest.raises(TerminalError):
        handler.get_commands()


def test_escape_before_eot_still_stops():
    commands = InputDecoder().decode(b"\x1b\x04x")
    assert types(commands) == [CommandType.STOP]


def test_control_byte_inside_csi_is_decoded_on_its_own():
    """Ctrl-D in the middle of an escape sequence still stops."""
    commands = InputDecoder().decode(b"\x1b[\x04")
    assert types(commands) == [CommandType.UNSUPPORTED, CommandType.STOP]
    assert commands[0].raw == b"\x1b["


def test_csi_cut_short_by_carriage_return():
    commands = InputDecoder().decode(b"\x1b[1\rx")
    assert types(commands) == [
        CommandType.UNSUPPORTED,
        CommandType.SPLIT_LINE,
        CommandType.INSERT_CHAR,
    ]
    assert commands[0].raw == b"\x1b[1"
