"""LineEditor - applies decoded input events to an edit buffer."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from elysh.edit.edit import WORD_CHARS, Edit
from elysh.edit.history import History
from elysh.input.keybindings import EditorAction, EditorKeybindingsManager, get_editor_keybindings
from elysh.input.keys import InputEvent, decode
from elysh.input.stdin_buffer import InputBuffer
from elysh.syntax.command import Command

logger = logging.getLogger(__name__)


class LineEditor:
    """Single-line shell editor with history recall.

    Feed it decoded events with ``handle_event`` or raw chunks with
    ``handle_input``. Submitted lines are handed to ``on_submit`` together
    with their parsed command.
    """

    def __init__(
        self,
        *,
        word_chars: Iterable[str] | None = None,
        history: History | None = None,
        keybindings: EditorKeybindingsManager | None = None,
    ) -> None:
        self._edit = Edit()
        self._history = history if history is not None else History()
        self._keybindings = keybindings
        self.word_chars: frozenset[str] = (
            frozenset(word_chars) if word_chars is not None else WORD_CHARS
        )

        # In-progress line, kept while browsing history
        self._stash: Edit | None = None

        self.on_submit: Callable[[str, Command], None] | None = None
        self.on_exit: Callable[[], None] | None = None

    @property
    def edit(self) -> Edit:
        return self._edit

    @property
    def history(self) -> History:
        return self._history

    @property
    def keybindings(self) -> EditorKeybindingsManager:
        return self._keybindings or get_editor_keybindings()

    def get_text(self) -> str:
        return self._edit.as_str()

    def set_text(self, text: str) -> None:
        """Replace the line, cursor at the end."""
        edit = Edit.from_string(text)
        edit.to_end()
        self._edit = edit

    def command(self) -> Command:
        return self._edit.command()

    def attach(self, buffer: InputBuffer) -> None:
        """Receive complete sequences from *buffer*."""
        buffer.on_data(self.handle_input)

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def handle_input(self, data: bytes) -> str | None:
        event = decode(data)
        if event is None:
            return None
        return self.handle_event(event)

    def handle_event(self, event: InputEvent) -> str | None:
        """Apply *event*. Returns the action taken, ``"insert"``, or ``None``."""
        action = self.keybindings.action_for(event)
        if action is not None:
            logger.debug("%s -> %s", event.key_id, action)
            self._apply(action)
            return action

        if event.kind == "paste":
            self._edit.insert_str(event.text or "")
            return "insert"

        if event.none:
            if event.kind == "space":
                self._edit.insert(" ")
                return "insert"
            if event.kind == "key" and event.char is not None:
                self._edit.insert(event.char)
                return "insert"

        return None

    def _apply(self, action: EditorAction) -> None:
        edit = self._edit

        if action == "historyUp":
            self._history_up()
        elif action == "historyDown":
            self._history_down()
        elif action == "cursorLeft":
            edit.prev()
        elif action == "cursorRight":
            edit.next()
        elif action == "cursorWordLeft":
            edit.prev_word(self.word_chars)
        elif action == "cursorWordRight":
            edit.next_word(self.word_chars)
        elif action == "cursorLineStart":
            edit.to_start()
        elif action == "cursorLineEnd":
            edit.to_end()
        elif action == "deleteCharBackward":
            edit.remove()
        elif action == "deleteCharForward":
            edit.remove_next()
        elif action == "deleteWordBackward":
            edit.remove_word(self.word_chars)
        elif action == "deleteToLineEnd":
            edit.remove_end()
        elif action == "clearLine":
            edit.clear()
            self._history.reset()
            self._stash = None
        elif action == "submit":
            self._submit()
        elif action == "exit":
            if self.on_exit:
                self.on_exit()

    # ------------------------------------------------------------------
    # History and submit
    # ------------------------------------------------------------------

    def _history_up(self) -> None:
        entry = self._history.prev()
        if entry is None:
            return
        if self._stash is None:
            self._stash = self._edit
        self.set_text(entry)

    def _history_down(self) -> None:
        if self._history.position == 0:
            return
        entry = self._history.next()
        if entry is not None:
            self.set_text(entry)
            return
        restored = self._stash if self._stash is not None else Edit()
        self._stash = None
        restored.to_end()
        self._edit = restored

    def _submit(self) -> None:
        if self._edit.is_empty():
            return
        text = self._edit.as_str()
        command = self._edit.command()
        self._history.push(text)
        self._stash = None
        self._edit = Edit()
        if self.on_submit:
            self.on_submit(text, command)
