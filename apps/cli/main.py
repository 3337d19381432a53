"""Typer CLI entrypoint for inspecting label documents."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from collections.abc import Callable
from typing import Annotated, Any, Literal, TypeVar, cast

import typer

from apps.cli.format_human import (
    render_line_labels,
    render_position,
    render_range,
    render_store_summary,
)
from labelstore.store.document_loader import build_store, load_document, load_options
from labelstore.store.label_store import LabelStore
from labelstore.utils.errors import LabelStoreError
from labelstore.utils.event_log import dump_json, log_event

app = typer.Typer(help="Label store inspection CLI", rich_markup_mode=None)
logger = logging.getLogger("labelstore.cli")
OutputFormat = Literal["human", "json"]
T = TypeVar("T")

EXIT_FAILURE = 1
EXIT_INVALID_DOCUMENT = 2
EXIT_LOOKUP_FAILED = 3

DocumentOption = Annotated[
    Path, typer.Option(..., "--document", exists=True, dir_okay=False, file_okay=True)
]
OptionsOption = Annotated[
    Path | None,
    typer.Option(
        "--options",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="YAML/JSON store options overriding the document's own options block.",
    ),
]
FormatOption = Annotated[str, typer.Option("--format")]


@app.callback()
def cli_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log store events to stderr at DEBUG level.")
    ] = False,
) -> None:
    """CLI root callback; configures logging for all subcommands."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


@app.command("inspect")
def inspect_command(
    document: DocumentOption,
    options: OptionsOption = None,
    output_format: FormatOption = "human",
) -> None:
    """Print line table totals and the resolved range of every label."""

    format_typed = _validate_format(output_format)
    store = _open_store(document, options)

    if format_typed == "json":
        typer.echo(dump_json(_store_payload(store)))
    else:
        typer.echo(render_store_summary(store))


@app.command("locate")
def locate_command(
    document: DocumentOption,
    offset: Annotated[int, typer.Option(..., "--offset")],
    options: OptionsOption = None,
    output_format: FormatOption = "human",
) -> None:
    """Resolve a global character offset to line and column."""

    format_typed = _validate_format(output_format)
    store = _open_store(document, options)
    position = _lookup(lambda: store.locate(offset), stage="locate")

    if format_typed == "json":
        typer.echo(dump_json({"offset": offset, **asdict(position)}))
    else:
        typer.echo(f"offset={offset} position={render_position(position)}")


@app.command("line")
def line_command(
    document: DocumentOption,
    line: Annotated[int, typer.Option(..., "--line")],
    options: OptionsOption = None,
    output_format: FormatOption = "human",
) -> None:
    """List labels that start or end on a line."""

    format_typed = _validate_format(output_format)
    store = _open_store(document, options)
    labels = _lookup(lambda: store.select_by_line(line), stage="line")

    if format_typed == "json":
        payload = {"line": line, "labels": [label.model_dump(mode="json") for label in labels]}
        typer.echo(dump_json(payload))
    else:
        typer.echo(render_line_labels(line, labels))


@app.command("range")
def range_command(
    document: DocumentOption,
    label_id: Annotated[int, typer.Option(..., "--id")],
    options: OptionsOption = None,
    output_format: FormatOption = "human",
) -> None:
    """Resolve one label's span to start and end line positions."""

    format_typed = _validate_format(output_format)
    store = _open_store(document, options)
    span = _lookup(lambda: store.get_line_range_by_id(label_id), stage="range")

    if format_typed == "json":
        payload = {"id": label_id, "start": asdict(span.start), "end": asdict(span.end)}
        typer.echo(dump_json(payload))
    else:
        typer.echo(f"#{label_id} range={render_range(span)}")


def _validate_format(output_format: str) -> OutputFormat:
    normalized = output_format.lower().strip()
    if normalized not in {"human", "json"}:
        typer.echo("ERROR: --format must be one of: human, json.")
        raise typer.Exit(code=EXIT_FAILURE)
    return cast(OutputFormat, normalized)


def _open_store(document_path: Path, options_path: Path | None) -> LabelStore:
    try:
        document = load_document(document_path)
        options = load_options(options_path) if options_path is not None else None
        store = build_store(document, options)
    except (ValueError, LabelStoreError) as exc:
        log_event(
            logger,
            logging.ERROR,
            "error",
            failure_stage="load_document",
            error_type=type(exc).__name__,
            document=str(document_path),
        )
        typer.echo(f"ERROR: invalid label document: {exc}")
        raise typer.Exit(code=EXIT_INVALID_DOCUMENT) from exc

    log_event(
        logger,
        logging.INFO,
        "loaded",
        document=str(document_path),
        label_count=len(store),
        line_count=store.line_count,
    )
    return store


def _lookup(query: Callable[[], T], *, stage: str) -> T:
    try:
        return query()
    except LabelStoreError as exc:
        log_event(
            logger,
            logging.ERROR,
            "error",
            failure_stage=stage,
            error_type=type(exc).__name__,
        )
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_LOOKUP_FAILED) from exc


def _store_payload(store: LabelStore) -> dict[str, Any]:
    labels: list[dict[str, Any]] = []
    for label in store.select():
        span = store.get_line_range_by_id(label.id)
        entry = label.model_dump(mode="json")
        entry["range"] = {"start": asdict(span.start), "end": asdict(span.end)}
        labels.append(entry)

    return {
        "line_count": store.line_count,
        "total_chars": store.total_chars,
        "last_id": store.last_id,
        "id_allocation": store.options.id_allocation,
        "labels": labels,
    }


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
