"""Tests for elysh.input.stdin_buffer.InputBuffer."""

from __future__ import annotations

import asyncio

import pytest

from elysh.input.stdin_buffer import (
    BRACKETED_PASTE_END,
    BRACKETED_PASTE_START,
    InputBuffer,
    _extract_complete_sequences,
    _is_complete_sequence,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Collector:
    """Collects emitted sequences for assertions."""

    def __init__(self) -> None:
        self.data: list[bytes] = []

    def on_data(self, d: bytes) -> None:
        self.data.append(d)


def make_buffer(timeout: float = 0.01) -> tuple[InputBuffer, Collector]:
    buf = InputBuffer(timeout=timeout)
    col = Collector()
    buf.on_data(col.on_data)
    return buf, col


def paste(content: bytes) -> bytes:
    return BRACKETED_PASTE_START + content + BRACKETED_PASTE_END


# ---------------------------------------------------------------------------
# Sequence classification
# ---------------------------------------------------------------------------


class TestIsCompleteSequence:
    @pytest.mark.parametrize(
        "data",
        [
            b"\x1b[A",
            b"\x1b[1;5A",
            b"\x1b[3~",
            b"\x1bOA",
            b"\x1bb",
            b"\x1b\xc3\xa9",
            b"\x1b]0;title\x07",
            b"\x1b]0;title\x1b\\",
            b"\x1bPdata\x1b\\",
            b"\x1b[<0;10;5M",
        ],
    )
    def test_complete(self, data):
        assert _is_complete_sequence(data) == "complete"

    @pytest.mark.parametrize(
        "data",
        [
            b"\x1b",
            b"\x1b[",
            b"\x1b[1;5",
            b"\x1bO",
            b"\x1b]0;t",
            b"\x1b\xc3",
            b"\x1b[<0;10",
        ],
    )
    def test_incomplete(self, data):
        assert _is_complete_sequence(data) == "incomplete"

    def test_not_escape(self):
        assert _is_complete_sequence(b"a") == "not-escape"


class TestExtractCompleteSequences:
    def test_plain_bytes(self):
        assert _extract_complete_sequences(b"ab") == ([b"a", b"b"], b"")

    def test_utf8_characters_stay_whole(self):
        assert _extract_complete_sequences("é日".encode()) == (["é".encode(), "日".encode()], b"")

    def test_partial_utf8_is_held(self):
        assert _extract_complete_sequences(b"a\xc3") == ([b"a"], b"\xc3")

    def test_partial_escape_is_held(self):
        assert _extract_complete_sequences(b"ab\x1b[") == ([b"a", b"b"], b"\x1b[")

    def test_mixed(self):
        sequences, rest = _extract_complete_sequences(b"a\x1b[A\x1b[1;5Bb")
        assert sequences == [b"a", b"\x1b[A", b"\x1b[1;5B", b"b"]
        assert rest == b""

    def test_stray_continuation_byte_passes_through(self):
        assert _extract_complete_sequences(b"\x80a") == ([b"\x80", b"a"], b"")

    def test_meta_utf8_stays_whole(self):
        assert _extract_complete_sequences(b"\x1b\xc3\xa9a") == ([b"\x1b\xc3\xa9", b"a"], b"")


# ---------------------------------------------------------------------------
# InputBuffer without a running event loop
# ---------------------------------------------------------------------------


class TestProcessSync:
    """With no running loop, incomplete tails are flushed immediately."""

    def test_initial_state(self):
        buf = InputBuffer()
        assert buf.get_buffer() == b""
        assert not buf.is_pasting()

    def test_single_key(self):
        buf, col = make_buffer()
        buf.process(b"a")
        assert col.data == [b"a"]

    def test_splits_multiple_keys(self):
        buf, col = make_buffer()
        buf.process(b"a\x1b[Ab")
        assert col.data == [b"a", b"\x1b[A", b"b"]

    def test_utf8(self):
        buf, col = make_buffer()
        buf.process("日".encode())
        assert col.data == ["日".encode()]

    def test_incomplete_tail_flushed_without_loop(self):
        buf, col = make_buffer()
        buf.process(b"\x1b[")
        assert col.data == [b"\x1b["]
        assert buf.get_buffer() == b""

    def test_no_callback_is_fine(self):
        buf = InputBuffer()
        buf.process(b"abc")
        assert buf.get_buffer() == b""


class TestPaste:
    def test_whole_paste(self):
        buf, col = make_buffer()
        buf.process(paste(b"hi there"))
        assert col.data == [paste(b"hi there")]

    def test_paste_split_across_reads(self):
        buf, col = make_buffer()
        buf.process(BRACKETED_PASTE_START + b"hi")
        assert col.data == []
        assert buf.is_pasting()
        buf.process(b" there" + BRACKETED_PASTE_END + b"x")
        assert col.data == [paste(b"hi there"), b"x"]
        assert not buf.is_pasting()

    def test_keys_before_paste(self):
        buf, col = make_buffer()
        buf.process(b"a" + paste(b"x"))
        assert col.data == [b"a", paste(b"x")]

    def test_escape_sequences_inside_paste_are_not_split(self):
        buf, col = make_buffer()
        buf.process(paste(b"\x1b[A"))
        assert col.data == [paste(b"\x1b[A")]


class TestClear:
    def test_clear_drops_paste_state(self):
        buf, col = make_buffer()
        buf.process(BRACKETED_PASTE_START + b"abc")
        buf.clear()
        assert not buf.is_pasting()
        buf.process(b"x")
        assert col.data == [b"x"]

    def test_flush_empty(self):
        buf = InputBuffer()
        assert buf.flush() == []

    def test_destroy(self):
        buf, _ = make_buffer()
        buf.destroy()
        assert buf.get_buffer() == b""


# ---------------------------------------------------------------------------
# InputBuffer inside an event loop
# ---------------------------------------------------------------------------


class TestProcessAsync:
    """A running loop holds incomplete tails until the timeout fires."""

    @pytest.mark.asyncio
    async def test_lone_escape_flushed_after_timeout(self):
        buf, col = make_buffer(timeout=0.01)
        buf.process(b"\x1b")
        assert col.data == []
        assert buf.get_buffer() == b"\x1b"
        await asyncio.sleep(0.05)
        assert col.data == [b"\x1b"]
        assert buf.get_buffer() == b""

    @pytest.mark.asyncio
    async def test_split_sequence_joined(self):
        buf, col = make_buffer(timeout=0.5)
        buf.process(b"\x1b[1;")
        buf.process(b"5A")
        assert col.data == [b"\x1b[1;5A"]

    @pytest.mark.asyncio
    async def test_split_utf8_joined(self):
        buf, col = make_buffer(timeout=0.5)
        buf.process(b"\xe6\x97")
        assert col.data == []
        buf.process(b"\xa5")
        assert col.data == ["日".encode()]

    @pytest.mark.asyncio
    async def test_split_meta_utf8_joined(self):
        buf, col = make_buffer(timeout=0.5)
        buf.process(b"\x1b\xc3")
        assert col.data == []
        buf.process(b"\xa9")
        assert col.data == [b"\x1b\xc3\xa9"]

    @pytest.mark.asyncio
    async def test_manual_flush(self):
        buf, col = make_buffer(timeout=0.5)
        buf.process(b"\x1b[")
        assert buf.flush() == [b"\x1b["]
        await asyncio.sleep(0)
        assert col.data == []
