"""Human-readable rendering of store contents for CLI output."""

from __future__ import annotations

from labelstore.store.label_store import LabelStore
from labelstore.store.models import Label, LabelLineRange, LinePosition


def render_store_summary(store: LabelStore) -> str:
    """Render one-screen summary of a store and every label's resolved range."""

    lines: list[str] = []
    lines.append("store_summary:")
    lines.append(
        f"line_count={store.line_count} total_chars={store.total_chars} "
        f"label_count={len(store)} last_id={store.last_id}"
    )
    labels = store.select()
    if not labels:
        lines.append("labels: none")
        return "\n".join(lines)

    lines.append("labels:")
    for label in labels:
        span = store.get_line_range_by_id(label.id)
        lines.append(f"  {render_label(label)} range={render_range(span)}")
    return "\n".join(lines)


def render_line_labels(line: int, labels: list[Label]) -> str:
    if not labels:
        return f"line={line} labels: none"
    rendered = ", ".join(render_label(label) for label in labels)
    return f"line={line} labels: {rendered}"


def render_label(label: Label) -> str:
    start, end = label.pos
    return f"#{label.id} category={label.category} pos={start}..{end}"


def render_range(span: LabelLineRange) -> str:
    return f"{render_position(span.start)}-{render_position(span.end)}"


def render_position(position: LinePosition) -> str:
    return f"{position.line}:{position.position}"
