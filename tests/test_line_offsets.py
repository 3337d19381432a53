from __future__ import annotations

import pytest

from labelstore.store.line_offsets import LineOffsetIndex
from labelstore.store.models import LinePosition
from labelstore.utils.errors import OutOfRangeLineError, OutOfRangeOffsetError

FIXTURE_LINES = [58, 69, 78, 67]


def _linear_resolve(lines_count: list[int], offset: int) -> int:
    upper = 0
    for line, count in enumerate(lines_count):
        upper += count
        if offset < upper:
            return line
    raise AssertionError(f"offset {offset} beyond total {upper}")


def test_accumulated_offsets_are_running_sums() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.accumulated == (58, 127, 205, 272)
    assert index.total == 272
    assert index.line_count == 4


def test_resolve_fixture_offsets() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.resolve(10) == 0
    assert index.resolve(58) == 1
    assert index.resolve(204) == 2
    with pytest.raises(OutOfRangeOffsetError):
        index.resolve(273)


def test_search_with_explicit_window_matches_fixture() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.search(10, 0, 3) == 0
    assert index.search(58, 0, 3) == 1
    assert index.search(204, 0, 3) == 2
    with pytest.raises(OutOfRangeOffsetError):
        index.search(273, 0, 3)


def test_boundary_offset_belongs_to_next_line() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.resolve(57) == 0
    assert index.resolve(58) == 1
    assert index.resolve(126) == 1
    assert index.resolve(127) == 2
    assert index.resolve(271) == 3


def test_total_offset_is_out_of_range() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    with pytest.raises(OutOfRangeOffsetError) as exc_info:
        index.resolve(272)

    assert exc_info.value.offset == 272
    assert exc_info.value.total == 272


def test_negative_offset_is_out_of_range() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    with pytest.raises(OutOfRangeOffsetError):
        index.resolve(-1)


@pytest.mark.parametrize(
    "lines_count",
    [
        [1],
        [5, 5, 5],
        [3, 0, 0, 4, 0, 2],
        [0, 0, 7],
        [10, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 0, 11],
    ],
)
def test_resolve_matches_linear_scan(lines_count: list[int]) -> None:
    index = LineOffsetIndex(lines_count)

    for offset in range(sum(lines_count)):
        assert index.resolve(offset) == _linear_resolve(lines_count, offset)


def test_empty_lines_are_skipped_by_resolution() -> None:
    index = LineOffsetIndex([3, 0, 0, 4])

    assert index.resolve(2) == 0
    assert index.resolve(3) == 3


def test_empty_table_rejects_every_offset() -> None:
    index = LineOffsetIndex([])

    assert index.total == 0
    assert index.line_count == 0
    with pytest.raises(OutOfRangeOffsetError):
        index.resolve(0)


def test_negative_line_length_is_rejected() -> None:
    with pytest.raises(ValueError, match="negative length"):
        LineOffsetIndex([4, -1])


def test_locate_returns_line_and_column() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.locate(1) == LinePosition(line=0, position=1)
    assert index.locate(81) == LinePosition(line=1, position=23)
    assert index.locate(205) == LinePosition(line=3, position=0)


def test_position_within_first_line_is_the_offset() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.position_within_line(42, 0) == 42
    assert index.position_within_line(130, 2) == 3


def test_offset_of_inverts_locate() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    for offset in range(index.total):
        assert index.offset_of(index.locate(offset)) == offset


def test_line_start_rejects_unknown_line() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    with pytest.raises(OutOfRangeLineError):
        index.line_start(4)


def test_index_keeps_its_own_copy_of_lengths() -> None:
    lines_count = [2, 2]
    index = LineOffsetIndex(lines_count)
    lines_count.append(10)

    assert index.lines_count == (2, 2)
    assert index.total == 4


@pytest.mark.parametrize("window", [(-1, -1), (-1, 3), (0, 4), (2, 1)])
def test_search_rejects_window_outside_line_table(window: tuple[int, int]) -> None:
    index = LineOffsetIndex(FIXTURE_LINES)
    start, end = window

    with pytest.raises(OutOfRangeLineError):
        index.search(5, start, end)


def test_search_within_sub_window() -> None:
    index = LineOffsetIndex(FIXTURE_LINES)

    assert index.search(130, 2, 3) == 2
    with pytest.raises(OutOfRangeOffsetError):
        index.search(210, 1, 2)
