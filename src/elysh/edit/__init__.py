"""Line editing: the edit buffer, history and the editor glue."""

from elysh.edit.edit import WORD_CHARS, Edit
from elysh.edit.editor import LineEditor
from elysh.edit.history import History
from elysh.edit.utils import visible_width

__all__ = [
    "WORD_CHARS",
    "Edit",
    "History",
    "LineEditor",
    "visible_width",
]
