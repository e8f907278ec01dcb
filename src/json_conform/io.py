"""Document loading and diff-log persistence.

Thin file-system glue around the comparison core: the core only ever sees
already-built trees, so every read or decode failure surfaces here, before
a comparison starts.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from json_conform.result import DiffLog
from json_conform.tree.builder import ValueBuilder
from json_conform.tree.nodes import Document

logger = logging.getLogger(__name__)

__all__ = ["DocumentLoadError", "load_document", "save_diff_log"]

LOG_FILE_PREFIX = "json_comp_"
LOG_TIMESTAMP_FORMAT = "%Y_%m_%d_%H_%M_%S"


class DocumentLoadError(ValueError):
    """A JSON document could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load JSON document {str(path)!r}: {reason}")
        self.path = path
        self.reason = reason


def load_document(path: str | Path, name: str | None = None) -> Document:
    """Read and decode a JSON file into a named Document.

    Args:
        path: Location of the JSON file (UTF-8, optional BOM).
        name: Document label; defaults to the file name.

    Returns:
        The Document, labeled for use as a diff path root.

    Raises:
        DocumentLoadError: If the file cannot be read, is not valid JSON or
            holds an integer beyond the digit limit.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(file_path, str(exc)) from exc

    try:
        root = ValueBuilder().build_text(text)
    except ValueError as exc:
        raise DocumentLoadError(file_path, f"invalid JSON: {exc}") from exc

    logger.debug("Loaded %s (%d bytes)", file_path, len(text))
    return Document(name=name if name is not None else file_path.name, root=root)


def save_diff_log(
    log: DiffLog,
    directory: str | Path = ".",
    now: datetime | None = None,
) -> Path:
    """Write the rendered log to ``json_comp_<YYYY_MM_DD_HH_MM_SS>`` in ``directory``.

    Args:
        log:       The finished DiffLog.
        directory: Target directory; created when missing.
        now:       Timestamp of the file name.  Defaults to the current time.

    Returns:
        Path of the written file.
    """
    stamp = (now if now is not None else datetime.now()).strftime(LOG_TIMESTAMP_FORMAT)
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{LOG_FILE_PREFIX}{stamp}"
    target.write_text(log.render(), encoding="utf-8")
    logger.info("Saved diff log to %s", target)
    return target
