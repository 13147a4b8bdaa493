"""Test full-screen rendering of the buffer."""

from rawedit.buffer import Line, LineBuffer
from rawedit.cursor import Viewport
from rawedit.model import EditorModel
from rawedit.view import TerminalTextView


class FakeTerminal:
    """Terminal double emitting readable markers instead of escape codes."""

    hide_cursor = "<hide>"
    show_cursor = "<show>"
    top_left = "<home>"
    erase_line = "<erase>"

    def __init__(self):
        self.written = b""

    def cursor_position(self, row, col):
        return f"<{row},{col}>"

    def write(self, data):
        self.written += data


def create_model(*contents, rows=3, cols=10):
    buffer = LineBuffer([Line(bytearray(c)) for c in contents])
    return EditorModel(buffer, Viewport(rows=rows, cols=cols))


def test_render_draws_lines_and_tildes():
    terminal = FakeTerminal()
    view = TerminalTextView(terminal)
    model = create_model(b"one", b"two", rows=4)
    view.render(model)
    assert terminal.written == (
        b"<hide><home>"
        b"<0,0><erase>one"
        b"<1,0><erase>two"
        b"<2,0><erase>~"
        b"<3,0><erase>~"
        b"<0,0><show>"
    )


def test_render_stops_at_viewport_height():
    """Without scrolling only the first rows are ever shown."""
    view = TerminalTextView(FakeTerminal())
    model = create_model(b"a", b"b", b"c", b"d", rows=2)
    frame = view.compose(model)
    assert b"c" not in frame
    assert b"~" not in frame


def test_render_truncates_to_viewport_width():
    view = TerminalTextView(FakeTerminal())
    model = create_model(b"0123456789abcdef", rows=1, cols=5)
    frame = view.compose(model)
    assert b"01234" in frame
    assert b"5" not in frame.replace(b"<0,0>", b"")


def test_render_places_cursor_at_screen_cursor():
    view = TerminalTextView(FakeTerminal())
    model = create_model(b"abcdef", b"gh")
    model.move_right()
    model.move_right()
    model.move_down()
    assert view.compose(model).endswith(b"<1,2><show>")


def test_render_passes_bytes_through_verbatim():
    view = TerminalTextView(FakeTerminal())
    model = create_model(b"\xff\xfe")
    assert b"<erase>\xff\xfe<" in view.compose(model)
