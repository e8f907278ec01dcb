from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from json_conform.algorithm.config import CompareDirection, ComparisonConfig
from json_conform.comparator import TreeComparator
from json_conform.io import DocumentLoadError, load_document, save_diff_log
from json_conform.result import DiffLog
from json_conform.tree.nodes import Document

app = typer.Typer(
    no_args_is_help=True,
    help=(
        "Compare two JSON documents and report every structural and value difference.\n\n"
        "Array elements are compared by position unless a key declaration such as"
        " 'DATA.cats.<array>.id' names the field identifying elements of that array."
    ),
)

_DIRECTIONS: dict[str, CompareDirection] = {
    "right": CompareDirection.RIGHT_AS_ACTUAL,
    "left": CompareDirection.LEFT_AS_ACTUAL,
    "both": CompareDirection.BOTH,
}


class _ProgressReporter:
    """ProgressObserver that advances a rich progress task."""

    def __init__(self, progress: Progress) -> None:
        self._progress = progress
        self._task = progress.add_task("Comparing", total=None)

    def element_visited(self, path: str) -> None:
        self._progress.advance(self._task)


def _configure_logging(verbose: int, console: Console) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(path: Path, param: str) -> Document:
    try:
        return load_document(path)
    except DocumentLoadError as exc:
        raise typer.BadParameter(str(exc), param_hint=param) from exc


def _print_log(console: Console, log: DiffLog) -> None:
    for record in log:
        console.print(record.path, style="bold", markup=False, highlight=False, soft_wrap=True)
        console.print(record.description, markup=False, highlight=False, soft_wrap=True)
        console.print()
    if log.aborted:
        console.print("comparison aborted before completion", style="yellow")
    console.print(log.summary(), markup=False, highlight=False)


@app.command()
def compare(
    left: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Left JSON document.",
    ),
    right: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Right JSON document.",
    ),
    direction: str = typer.Option(
        "right",
        "--direction",
        "-d",
        help="Which document is validated: 'right' (against left), 'left' (against right) or 'both'.",
    ),
    keys: list[str] = typer.Option(
        [],
        "--key",
        "-k",
        help="Key declaration such as 'DATA.cats.<array>.id' (repeatable).",
    ),
    ignores: list[str] = typer.Option(
        [],
        "--ignore",
        "-i",
        help="Path whose value mismatches are ignored, e.g. 'DATA//meta//updated' (repeatable).",
    ),
    coerce_types: bool = typer.Option(
        False,
        "--coerce-types",
        help="Treat values like \"1.4\" and 1.4 as equal.",
    ),
    progress: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show a progress indicator while comparing.",
    ),
    save_log: bool = typer.Option(
        False,
        "--save-log",
        help="Write the findings to a json_comp_<timestamp> file.",
    ),
    log_dir: Path = typer.Option(
        Path("."),
        "--log-dir",
        file_okay=False,
        dir_okay=True,
        help="Directory for --save-log output.",
    ),
    fail_on_diff: bool = typer.Option(
        False,
        "--fail-on-diff",
        help="Exit with code 1 if any differences are found.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI color output."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity."),
) -> None:
    console = Console(color_system=None if no_color else "auto")
    _configure_logging(verbose, console)

    chosen = _DIRECTIONS.get(direction.lower())
    if chosen is None:
        raise typer.BadParameter(
            f"expected one of {', '.join(_DIRECTIONS)}, got {direction!r}",
            param_hint="--direction",
        )

    left_doc = _load(left, "LEFT")
    right_doc = _load(right, "RIGHT")
    config = ComparisonConfig(
        key_declarations=tuple(keys),
        ignore_paths=frozenset(ignores),
        coerce_types=coerce_types,
    )

    if progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TextColumn("{task.completed:.0f} items"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as bar:
            comparator = TreeComparator(config, observer=_ProgressReporter(bar))
            log = comparator.compare(left_doc, right_doc, direction=chosen)
    else:
        log = TreeComparator(config).compare(left_doc, right_doc, direction=chosen)

    _print_log(console, log)

    if save_log:
        target = save_diff_log(log, log_dir)
        console.print(f"Saved log to {target}", markup=False, soft_wrap=True)

    if fail_on_diff and log.total:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
