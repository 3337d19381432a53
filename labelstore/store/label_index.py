"""Id to label mapping with duplicate detection and id tracking."""

from __future__ import annotations

from labelstore.store.models import Label
from labelstore.utils.errors import DuplicateIdError, UnknownIdError


class LabelIndex:
    """Own the canonical label instances keyed by id, in insertion order."""

    def __init__(self) -> None:
        self._labels: dict[int, Label] = {}
        self._last_id = 0

    @property
    def last_id(self) -> int:
        """Highest id currently registered, or 0 when empty."""

        return self._last_id

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label_id: object) -> bool:
        return label_id in self._labels

    def check_available(self, label_id: int) -> None:
        if label_id in self._labels:
            raise DuplicateIdError(f"Label id#{label_id} is duplicated", label_id=label_id)

    def set(self, label: Label) -> None:
        self.check_available(label.id)
        self._labels[label.id] = label
        self._last_id = max(self._last_id, label.id)

    def peek(self, label_id: int) -> Label:
        """Return the canonical instance; callers must not hand it out."""

        try:
            return self._labels[label_id]
        except KeyError as exc:
            raise UnknownIdError(
                f"Label id({label_id}) does not map to a registered label",
                label_id=label_id,
            ) from exc

    def get(self, label_id: int) -> Label:
        return self.peek(label_id).model_copy(deep=True)

    def remove(self, label_id: int) -> Label:
        label = self.peek(label_id)
        del self._labels[label_id]
        # The removed id may have been the maximum.
        self._last_id = max((0, *self._labels))
        return label

    def ids(self) -> list[int]:
        return list(self._labels)

    def all(self) -> list[Label]:
        return [label.model_copy(deep=True) for label in self._labels.values()]
