"""Global character offset to line resolution over accumulated line lengths."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable

from labelstore.store.models import LinePosition
from labelstore.utils.errors import OutOfRangeLineError, OutOfRangeOffsetError


class LineOffsetIndex:
    """Prefix sums of per-line character counts with binary search lookup.

    ``accumulated[i]`` is the exclusive upper bound of every offset that lives
    on line ``i`` or earlier. An offset equal to ``accumulated[i]`` therefore
    belongs to line ``i + 1``.
    """

    def __init__(self, lines_count: Iterable[int]) -> None:
        counts = tuple(lines_count)
        accumulated: list[int] = []
        total = 0
        for index, count in enumerate(counts):
            if count < 0:
                raise ValueError(f"Line #{index} has negative length {count}")
            total += count
            accumulated.append(total)
        self._lines_count = counts
        self._accumulated = tuple(accumulated)

    @property
    def line_count(self) -> int:
        return len(self._accumulated)

    @property
    def total(self) -> int:
        return self._accumulated[-1] if self._accumulated else 0

    @property
    def lines_count(self) -> tuple[int, ...]:
        return self._lines_count

    @property
    def accumulated(self) -> tuple[int, ...]:
        return self._accumulated

    def resolve(self, offset: int) -> int:
        """Return the line number that contains ``offset``."""

        if offset < 0 or not self._accumulated:
            raise OutOfRangeOffsetError(
                f"Offset {offset} is out of range [0, {self.total})",
                offset=offset,
                total=self.total,
            )
        return self.search(offset, 0, self.line_count - 1)

    def search(self, offset: int, start: int, end: int) -> int:
        """Binary search the inclusive line window ``[start, end]`` for ``offset``.

        Returns the first line in the window whose accumulated count exceeds
        ``offset``. When no line in the window bounds it the offset lies past
        the window.
        """

        if not 0 <= start <= end < self.line_count:
            raise OutOfRangeLineError(
                f"Line window [{start}, {end}] is out of range",
                line=start if not 0 <= start < self.line_count else end,
                line_count=self.line_count,
            )

        line = bisect_right(self._accumulated, offset, start, end + 1)
        if line > end:
            raise OutOfRangeOffsetError(
                f"Offset {offset} is out of range ({end}:{self._accumulated[end]})",
                offset=offset,
                total=self.total,
            )
        return line

    def line_start(self, line: int) -> int:
        """Global offset of the first character on ``line``."""

        if not 0 <= line < self.line_count:
            raise OutOfRangeLineError(
                f"Line number #{line} is out of range",
                line=line,
                line_count=self.line_count,
            )
        return self._accumulated[line - 1] if line > 0 else 0

    def position_within_line(self, offset: int, line: int) -> int:
        return offset - self.line_start(line)

    def locate(self, offset: int) -> LinePosition:
        line = self.resolve(offset)
        return LinePosition(line=line, position=self.position_within_line(offset, line))

    def offset_of(self, position: LinePosition) -> int:
        """Map a resolved position back to its global offset."""

        return self.line_start(position.line) + position.position
