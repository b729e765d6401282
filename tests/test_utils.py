"""Tests for elysh.edit.utils.visible_width."""

from __future__ import annotations

import pytest

from elysh.edit.utils import visible_width


class TestVisibleWidth:
    @pytest.mark.parametrize(
        "text, width",
        [
            ("", 0),
            ("abc", 3),
            ("ls -l", 5),
            ("日本", 4),
            ("e\u0301", 1),
            ("\t", 1),
            ("a日b", 4),
        ],
    )
    def test_width(self, text, width):
        assert visible_width(text) == width

    def test_emoji_is_wide(self):
        assert visible_width("\U0001F44D") == 2

    def test_cached_result_is_stable(self):
        assert visible_width("日本語") == visible_width("日本語") == 6
