"""Line number to labels mapping."""

from __future__ import annotations

from labelstore.store.models import Label
from labelstore.utils.errors import OutOfRangeLineError


class LineMembershipIndex:
    """Track which labels start or end on each line.

    One bucket exists per entry of the line-length table, so trailing lines
    without labels still answer queries with an empty list. A label spanning
    several lines is listed under its start and end lines only.
    """

    def __init__(self, line_count: int) -> None:
        self._lines: list[list[Label]] = [[] for _ in range(line_count)]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def insert(self, label: Label, start_line: int, end_line: int) -> None:
        self._bucket(start_line).append(label)
        if end_line != start_line:
            self._bucket(end_line).append(label)

    def remove(self, label_id: int) -> int:
        """Drop every entry for ``label_id`` and return how many were removed."""

        removed = 0
        for index, labels in enumerate(self._lines):
            kept = [label for label in labels if label.id != label_id]
            removed += len(labels) - len(kept)
            self._lines[index] = kept
        return removed

    def query(self, line: int) -> list[Label]:
        return [label.model_copy(deep=True) for label in self._bucket(line)]

    def _bucket(self, line: int) -> list[Label]:
        if not 0 <= line < len(self._lines):
            raise OutOfRangeLineError(
                f"Line number #{line} is out of range",
                line=line,
                line_count=len(self._lines),
            )
        return self._lines[line]
