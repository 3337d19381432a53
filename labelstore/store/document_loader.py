"""Loading utilities for label documents and store options."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from labelstore.store.label_store import LabelStore
from labelstore.store.models import LabelDocument, StoreOptions


def load_document(path: Path) -> LabelDocument:
    """Load and validate a label document from YAML or JSON.

    Files ending in ``.json`` are parsed as JSON, anything else as YAML.
    """

    raw = _read_mapping(path, kind="Label document")
    try:
        return LabelDocument.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid label document schema: {path}") from exc


def load_options(path: Path) -> StoreOptions:
    """Load store options from a standalone YAML or JSON file."""

    raw = _read_mapping(path, kind="Store options")
    try:
        return StoreOptions.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid store options schema: {path}") from exc


def build_store(document: LabelDocument, options: StoreOptions | None = None) -> LabelStore:
    """Build a store from a loaded document; explicit options win over the document's."""

    return LabelStore(
        document.lines_count,
        document.labels,
        options=options or document.options,
    )


def _read_mapping(path: Path, *, kind: str) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"{kind} file not found: {path}") from exc

    if path.suffix.lower() == ".json":
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {kind.lower()} file: {path}") from exc
    else:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {kind.lower()} file: {path}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"{kind} file must contain a mapping: {path}")
    return raw
