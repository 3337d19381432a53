"""Label store facade keeping the offset, id and line indexes consistent."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from labelstore.store.label_index import LabelIndex
from labelstore.store.line_membership import LineMembershipIndex
from labelstore.store.line_offsets import LineOffsetIndex
from labelstore.store.models import Label, LabelLineRange, LinePosition, StoreOptions
from labelstore.utils.errors import LabelStoreError
from labelstore.utils.event_log import log_event

logger = logging.getLogger("labelstore.store")


class LabelStore:
    """Position-indexed store of labels over a fixed line-length table.

    Every mutation resolves the label span before touching any index, so a
    failing ``add`` or a failing construction never leaves a partial entry
    behind. All labels handed out are deep copies.
    """

    def __init__(
        self,
        lines_count: Iterable[int],
        labels: Iterable[Label] = (),
        options: StoreOptions | None = None,
    ) -> None:
        self._options = options or StoreOptions()
        self._offsets = LineOffsetIndex(lines_count)
        self._index = LabelIndex()
        self._lines = LineMembershipIndex(self._offsets.line_count)
        self._high_water = 0

        for label in labels:
            self._register(label.model_copy(deep=True))

        log_event(
            logger,
            logging.DEBUG,
            "build",
            line_count=self._offsets.line_count,
            total_chars=self._offsets.total,
            label_count=len(self._index),
            id_allocation=self._options.id_allocation,
        )

    @property
    def options(self) -> StoreOptions:
        return self._options.model_copy()

    @property
    def line_count(self) -> int:
        return self._offsets.line_count

    @property
    def total_chars(self) -> int:
        return self._offsets.total

    @property
    def last_id(self) -> int:
        return self._index.last_id

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, label_id: object) -> bool:
        return label_id in self._index

    def select(self) -> list[Label]:
        """Return copies of all labels in insertion order."""

        return self._index.all()

    def get_by_id(self, label_id: int) -> Label:
        return self._index.get(label_id)

    def select_by_line(self, line: int) -> list[Label]:
        """Return copies of the labels that start or end on ``line``."""

        return self._lines.query(line)

    def get_line_range_by_id(self, label_id: int) -> LabelLineRange:
        label = self._index.peek(label_id)
        return self._resolve_span(label)

    def resolve_line(self, offset: int) -> int:
        return self._offsets.resolve(offset)

    def locate(self, offset: int) -> LinePosition:
        return self._offsets.locate(offset)

    def add(self, category: int, pos: tuple[int, int]) -> Label:
        """Create a label with the next free id and return a copy of it."""

        label = Label(id=self._next_id(), category=category, pos=pos)
        try:
            self._register(label)
        except LabelStoreError as exc:
            log_event(
                logger,
                logging.WARNING,
                "add_rejected",
                error_type=type(exc).__name__,
                error_message=str(exc),
                pos=list(label.pos),
            )
            raise
        log_event(
            logger,
            logging.DEBUG,
            "add",
            label_id=label.id,
            category=label.category,
            pos=list(label.pos),
        )
        return label.model_copy(deep=True)

    def remove(self, label_id: int) -> None:
        self._index.peek(label_id)
        removed_entries = self._lines.remove(label_id)
        self._index.remove(label_id)
        log_event(
            logger,
            logging.DEBUG,
            "remove",
            label_id=label_id,
            line_entries=removed_entries,
            last_id=self._index.last_id,
        )

    def _register(self, label: Label) -> None:
        span = self._resolve_span(label)
        self._index.set(label)
        self._lines.insert(label, span.start.line, span.end.line)
        self._high_water = max(self._high_water, label.id)

    def _resolve_span(self, label: Label) -> LabelLineRange:
        start_offset, end_offset = label.pos
        return LabelLineRange(
            start=self._offsets.locate(start_offset),
            end=self._offsets.locate(end_offset),
        )

    def _next_id(self) -> int:
        if self._options.id_allocation == "monotonic":
            return self._high_water + 1
        return self._index.last_id + 1
