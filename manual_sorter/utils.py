"""Cross-cutting helpers: constants, name sanitizing, metadata and report I/O."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from .errors import MetadataError
from .models import MetadataRecord, SortStats, SortTask

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PDF_SUFFIX = ".pdf"
METADATA_SUFFIX = ".json"
MAX_FOLDER_NAME_LENGTH = 50
MAX_MANUAL_TYPE_LENGTH = 20
MAX_CONFLICT_ATTEMPTS = 100
TARGET_DIR_MIN_LENGTH = 2
TARGET_DIR_MAX_LENGTH = 30
REPORT_FILE_NAME = "sort_report.json"

_INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")
_UNDERSCORE_RUN_RE = re.compile(r"_{2,}")
_TARGET_DIR_RE = re.compile(r"[A-Za-z][A-Za-z0-9\s\-_]*")


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def sanitize_folder_name(value: Any) -> str:
    """Turn *value* into a path segment that is safe on common filesystems.

    Non-string or empty input yields ``""``. Invalid characters and
    whitespace runs become ``_``, underscore runs are collapsed, and the
    result is stripped of surrounding underscores and cut to
    ``MAX_FOLDER_NAME_LENGTH`` characters.
    """
    if not value or not isinstance(value, str):
        return ""
    name = value.strip()
    name = _INVALID_CHARS_RE.sub("_", name)
    name = _WHITESPACE_RE.sub("_", name)
    name = _UNDERSCORE_RUN_RE.sub("_", name)
    name = name.strip("_")
    # Truncation can expose a trailing underscore again.
    return name[:MAX_FOLDER_NAME_LENGTH].rstrip("_")


def is_target_directory(name: str) -> bool:
    """Return True if a directory name looks like an already sorted folder."""
    return (
        _TARGET_DIR_RE.fullmatch(name) is not None
        and TARGET_DIR_MIN_LENGTH < len(name) < TARGET_DIR_MAX_LENGTH
    )


def is_pdf(path: Path) -> bool:
    return path.suffix.lower() == PDF_SUFFIX


def metadata_path_for(pdf_path: Path) -> Path:
    """Return the companion metadata path (``X.pdf`` -> ``X.json``)."""
    return pdf_path.with_suffix(METADATA_SUFFIX)


# ---------------------------------------------------------------------------
# Metadata I/O
# ---------------------------------------------------------------------------


def load_metadata(path: Path) -> MetadataRecord:
    """Read and parse a metadata file, raising ``MetadataError`` on failure."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (json.JSONDecodeError, OSError, ValueError, RecursionError) as exc:
        raise MetadataError(f"Could not read metadata {path.name}: {exc}") from exc
    return MetadataRecord.from_dict(data)


# ---------------------------------------------------------------------------
# Run report I/O
# ---------------------------------------------------------------------------


def _path_or_none(path: Path | None) -> str | None:
    return str(path) if path is not None else None


def save_sort_report(
    report_path: Path,
    tasks: list[SortTask],
    stats: SortStats,
    *,
    source_dir: Path,
    target_dir: Path,
    dry_run: bool,
) -> Path:
    """Write a JSON summary of one run and return its path."""
    entries: list[dict[str, Any]] = []
    for task in tasks:
        entries.append(
            {
                "filename": task.filename,
                "source": str(task.pdf_path),
                "metadata_source": str(task.metadata_path),
                "status": task.status,
                "target_folder": _path_or_none(task.target_folder),
                "pdf_destination": _path_or_none(task.pdf_destination),
                "metadata_destination": _path_or_none(task.metadata_destination),
                "reason": task.reason,
                "error": task.error,
            }
        )

    report = {
        "source_dir": str(source_dir),
        "target_dir": str(target_dir),
        "dry_run": dry_run,
        "stats": stats.as_dict(),
        "files": entries,
    }
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2, ensure_ascii=False, default=str)
    return report_path
