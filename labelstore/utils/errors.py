"""Custom exceptions for label store operations."""

from __future__ import annotations


class LabelStoreError(Exception):
    """Base class for failures raised by the label store and its indexes."""


class UnknownIdError(LabelStoreError):
    """Raised when a label id does not map to a registered label."""

    def __init__(self, message: str, *, label_id: int) -> None:
        super().__init__(message)
        self.label_id = label_id


class DuplicateIdError(LabelStoreError):
    """Raised when a label id is registered twice."""

    def __init__(self, message: str, *, label_id: int) -> None:
        super().__init__(message)
        self.label_id = label_id


class OutOfRangeLineError(LabelStoreError):
    """Raised when a line number falls outside the line-length table."""

    def __init__(self, message: str, *, line: int, line_count: int) -> None:
        super().__init__(message)
        self.line = line
        self.line_count = line_count


class OutOfRangeOffsetError(LabelStoreError):
    """Raised when a character offset cannot be resolved to a line."""

    def __init__(self, message: str, *, offset: int, total: int) -> None:
        super().__init__(message)
        self.offset = offset
        self.total = total
