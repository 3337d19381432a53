"""Data models for labels, resolved line positions, and store configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

IdAllocation = Literal["max_remaining", "monotonic"]


class Label(BaseModel):
    """Tagged span over the global character stream."""

    model_config = ConfigDict(extra="forbid")

    id: int
    category: int
    pos: tuple[int, int]

    @model_validator(mode="after")
    def _check_span(self) -> Label:
        start, end = self.pos
        if start < 0:
            raise ValueError(f"label start offset must be non-negative, got {start}")
        if start > end:
            raise ValueError(f"label start offset {start} is after end offset {end}")
        return self

    @property
    def start(self) -> int:
        return self.pos[0]

    @property
    def end(self) -> int:
        return self.pos[1]


@dataclass(frozen=True)
class LinePosition:
    """Zero-based line number and column within that line."""

    line: int
    position: int


class LabelLineRange(NamedTuple):
    """Resolved start and end positions of a label span."""

    start: LinePosition
    end: LinePosition


class StoreOptions(BaseModel):
    """Behavior switches for a label store instance.

    ``id_allocation`` controls how ``add`` picks the next id:

    - ``max_remaining`` recomputes the highest id over the labels still present
      after every removal, so removing the current maximum lets the next ``add``
      hand out that id again.
    - ``monotonic`` never hands out an id at or below one the store has seen.
    """

    model_config = ConfigDict(extra="forbid")

    id_allocation: IdAllocation = "max_remaining"


class LabelDocument(BaseModel):
    """Line-length table plus initial labels, as loaded from YAML or JSON."""

    model_config = ConfigDict(extra="forbid")

    lines_count: list[NonNegativeInt]
    labels: list[Label] = Field(default_factory=list)
    options: StoreOptions = Field(default_factory=StoreOptions)
