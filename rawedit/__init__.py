"""rawedit - A raw-mode terminal text editing core."""

from .buffer import Line, LineBuffer
from .cursor import CoordinateMapper, EditPosition, ScreenCursor, Viewport
from .keyboard import Command, CommandType, InputDecoder
from .model import EditorModel

__all__ = [
    'Line',
    'LineBuffer',
    'CoordinateMapper',
    'EditPosition',
    'ScreenCursor',
    'Viewport',
    'Command',
    'CommandType',
    'InputDecoder',
    'EditorModel',
]
