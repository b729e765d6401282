"""In-memory command history with a recall position."""

from __future__ import annotations


class History:
    """Submitted lines, most recent first.

    ``position`` 0 means "not browsing"; position ``n`` refers to the n-th
    most recent entry. Moving past either end saturates.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._entries: list[str] = []
        self._position: int = 0
        self._max_size = max_size

    def push(self, line: str) -> None:
        """Record *line* as the newest entry and stop browsing."""
        if not line:
            return
        self._entries.insert(0, line)
        if self._max_size is not None and len(self._entries) > self._max_size:
            del self._entries[self._max_size :]
        self.reset()

    def prev(self) -> str | None:
        """Step to an older entry."""
        self._position = min(self._position + 1, len(self._entries))
        return self.get()

    def next(self) -> str | None:
        """Step to a newer entry; ``None`` once back at the live line."""
        self._position = max(self._position - 1, 0)
        return self.get()

    def get(self) -> str | None:
        if self._position == 0:
            return None
        return self._entries[self._position - 1]

    def reset(self) -> None:
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
