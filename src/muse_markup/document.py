"""Document text with the list-end annotation side channel."""

import bisect
from typing import List, Optional, Tuple


class Document:
    """
    Plain-text document addressed by integer offsets.

    Positions covered by a list-end annotation mark where an enclosing list's
    text extent stops. Annotations are placed by a structural pre-pass before
    any list traversal and are read-only while a traversal runs.
    """

    def __init__(self, text: str):
        self.text = text
        # Sorted, non-overlapping, non-adjacent [start, end) ranges
        self._list_ends: List[Tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return len(self.text)

    def mark_list_end(self, start: int, end: Optional[int] = None):
        """Annotate ``[start, end)`` as a list end (one character by default)."""
        if end is None:
            end = start + 1
        start = max(0, start)
        end = min(end, self.end)
        if start >= end:
            return

        # Ranges overlapping or touching [start, end] collapse into one
        low = bisect.bisect_left(self._list_ends, (start, start))
        if low > 0 and self._list_ends[low - 1][1] >= start:
            low -= 1
        high = bisect.bisect_right(self._list_ends, (end, float("inf")))
        if low < high:
            start = min(start, self._list_ends[low][0])
            end = max(end, self._list_ends[high - 1][1])
        self._list_ends[low:high] = [(start, end)]

    def clear_list_ends(self):
        self._list_ends = []

    @property
    def list_ends(self) -> List[Tuple[int, int]]:
        return list(self._list_ends)

    def is_list_end(self, position: int) -> bool:
        """Return True if ``position`` carries the list-end annotation."""
        index = bisect.bisect_right(self._list_ends, (position, float("inf"))) - 1
        if index < 0:
            return False
        start, end = self._list_ends[index]
        return start <= position < end

    def next_list_end_change(self, position: int) -> Optional[int]:
        """
        Find the next position after ``position`` where the annotation changes.

        Returns:
            The offset of the change, or None if the annotation is constant
            from ``position`` to the end of the document
        """
        index = bisect.bisect_right(self._list_ends, (position, float("inf")))
        if index > 0:
            end = self._list_ends[index - 1][1]
            if end > position:
                return end if end < self.end else None
        if index < len(self._list_ends):
            return self._list_ends[index][0]
        return None

    def forward_line(self, position: int) -> int:
        """Return the start of the line after ``position``, or the document end."""
        newline = self.text.find("\n", position)
        if newline == -1:
            return self.end
        return newline + 1

    def line_bounds(self, position: int) -> Tuple[int, int]:
        """Return ``(start, end)`` of the line containing ``position``, newline excluded."""
        start = self.text.rfind("\n", 0, position) + 1
        end = self.text.find("\n", position)
        if end == -1:
            end = self.end
        return start, end

    def line_at(self, position: int) -> str:
        start, end = self.line_bounds(position)
        return self.text[start:end]

    def line_number(self, position: int) -> int:
        """1-based line number of ``position``."""
        return self.text.count("\n", 0, position) + 1
