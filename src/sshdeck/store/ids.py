"""Sequential ID allocation for stores."""


class IDAllocator:
    """Hands out increasing integer IDs, starting right after ``start``."""

    def __init__(self, start: int = 0):
        self._start = start
        self._last = start

    def next(self) -> int:
        self._last += 1
        return self._last

    def reset(self) -> None:
        self._last = self._start

    def advance_past(self, used_id: int) -> None:
        """Make sure an ID that is already taken is never handed out."""
        if used_id > self._last:
            self._last = used_id
