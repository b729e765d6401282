"""InputBuffer buffers raw terminal reads and emits complete sequences.

A single read can carry several key presses, or only part of an escape
sequence. ``decode`` needs exactly one sequence per call, so this buffer
splits reads into single bytes, whole UTF-8 characters, complete escape
sequences and whole bracketed-paste envelopes, holding back an incomplete
tail until more data arrives or a short timeout expires.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Callable, Literal

logger = logging.getLogger(__name__)

ESC = b"\x1b"
BRACKETED_PASTE_START = b"\x1b[200~"
BRACKETED_PASTE_END = b"\x1b[201~"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(rb"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: bytes) -> SequenceStatus:
    """Is *data* a complete escape sequence, or does it need more bytes?"""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith(b"["):
        if after_esc.startswith(b"[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC sequences: ESC ]
    if after_esc.startswith(b"]"):
        return _is_complete_terminated(data, allow_bel=True)

    # DCS sequences: ESC P, APC sequences: ESC _
    if after_esc.startswith(b"P") or after_esc.startswith(b"_"):
        return _is_complete_terminated(data, allow_bel=False)

    # SS3 sequences: ESC O
    if after_esc.startswith(b"O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by one character
    return "complete" if len(after_esc) >= _utf8_length(after_esc[0]) else "incomplete"


def _is_complete_csi_sequence(data: bytes) -> SequenceStatus:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    final = payload[-1]

    if 0x40 <= final <= 0x7E:
        if payload.startswith(b"<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"

    return "incomplete"


def _is_complete_terminated(data: bytes, *, allow_bel: bool) -> SequenceStatus:
    if data.endswith(ESC + b"\\"):
        return "complete"
    if allow_bel and data.endswith(b"\x07"):
        return "complete"
    return "incomplete"


def _utf8_length(lead: int) -> int:
    """Byte length of the UTF-8 character starting with *lead*."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    # Stray continuation or invalid lead byte: pass it through alone.
    return 1


def _extract_complete_sequences(buffer: bytes) -> tuple[list[bytes], bytes]:
    """Split accumulated bytes into complete sequences.

    Returns (sequences, remainder).
    """
    sequences: list[bytes] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if remaining.startswith(ESC):
            seq_end = 1
            while seq_end <= len(remaining):
                candidate = remaining[:seq_end]
                if _is_complete_sequence(candidate) == "incomplete":
                    seq_end += 1
                    continue
                sequences.append(candidate)
                pos += seq_end
                break
            else:
                return sequences, remaining
        else:
            length = _utf8_length(remaining[0])
            if length > len(remaining):
                return sequences, remaining
            sequences.append(remaining[:length])
            pos += length

    return sequences, b""


class InputBuffer:
    """Buffers terminal input and emits complete sequences.

    Handles partial escape sequences and UTF-8 characters that arrive
    across multiple reads. Bracketed pastes are emitted whole, envelope
    included, so ``decode`` sees them as a single paste.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: bytes = b""
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._timeout: float = timeout
        self._paste_mode: bool = False
        self._paste_buffer: bytes = b""

        self._on_data: Callable[[bytes], object] | None = None

    def on_data(self, callback: Callable[[bytes], object]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def _emit_data(self, data: bytes) -> None:
        if self._on_data:
            self._on_data(data)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def process(self, data: bytes) -> None:
        """Feed raw input into the buffer."""
        self._cancel_timeout()

        self._buffer += data

        if self._paste_mode:
            self._paste_buffer += self._buffer
            self._buffer = b""
            self._finish_paste()
            return

        start_index = self._buffer.find(BRACKETED_PASTE_START)
        if start_index != -1:
            if start_index > 0:
                sequences, _ = _extract_complete_sequences(self._buffer[:start_index])
                for sequence in sequences:
                    self._emit_data(sequence)

            self._paste_mode = True
            self._paste_buffer = self._buffer[start_index + len(BRACKETED_PASTE_START) :]
            self._buffer = b""
            self._finish_paste()
            return

        sequences, remainder = _extract_complete_sequences(self._buffer)
        self._buffer = remainder

        for sequence in sequences:
            self._emit_data(sequence)

        if self._buffer:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No event loop - flush immediately
                for sequence in self.flush():
                    self._emit_data(sequence)
            else:
                self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _finish_paste(self) -> None:
        end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end_index == -1:
            return

        content = self._paste_buffer[:end_index]
        remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END) :]

        self._paste_mode = False
        self._paste_buffer = b""

        logger.debug("Bracketed paste of %d bytes", len(content))
        self._emit_data(BRACKETED_PASTE_START + content + BRACKETED_PASTE_END)

        if remaining:
            self.process(remaining)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit_data(sequence)

    def flush(self) -> list[bytes]:
        """Return and drop whatever is still held back."""
        self._cancel_timeout()

        if not self._buffer:
            return []

        logger.debug("Flushing incomplete input %r", self._buffer)
        sequences = [self._buffer]
        self._buffer = b""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = b""
        self._paste_mode = False
        self._paste_buffer = b""

    def get_buffer(self) -> bytes:
        return self._buffer

    def is_pasting(self) -> bool:
        return self._paste_mode

    def destroy(self) -> None:
        self.clear()
