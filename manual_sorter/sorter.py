"""Metadata-driven folder naming and conflict-safe moves."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from .errors import ConflictError, MetadataError, MoveError
from .models import MetadataRecord, SortStats, SortTask
from .sources import iter_pdfs
from .utils import (
    MAX_CONFLICT_ATTEMPTS,
    MAX_MANUAL_TYPE_LENGTH,
    load_metadata,
    metadata_path_for,
    sanitize_folder_name,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Target naming
# ---------------------------------------------------------------------------


def _year_segment(metadata: MetadataRecord) -> str:
    value = metadata.year_range or metadata.year
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return sanitize_folder_name(str(value))


def _manual_type_segment(metadata: MetadataRecord) -> str:
    manual_type = metadata.manual_type
    if (
        not isinstance(manual_type, str)
        or not manual_type
        or manual_type == "other"
        or len(manual_type) >= MAX_MANUAL_TYPE_LENGTH
    ):
        return ""
    return sanitize_folder_name(manual_type)


def build_folder_name(brand: str, model: str, metadata: MetadataRecord) -> str:
    """Build ``Brand[_Model][_Year][_Type]`` from sanitized brand and model."""
    segments = [brand]
    if model:
        segments.append(model)
    year = _year_segment(metadata)
    if year:
        segments.append(year)
    manual_type = _manual_type_segment(metadata)
    if manual_type:
        segments.append(manual_type)
    return "_".join(segments)


def create_target_path(
    target_dir: Path, brand: str, model: str, metadata: MetadataRecord
) -> Path:
    return target_dir / build_folder_name(brand, model, metadata)


# ---------------------------------------------------------------------------
# Moving
# ---------------------------------------------------------------------------


def _occupied(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def resolve_conflict(path: Path) -> Path:
    """Return *path*, or ``<stem>_N<suffix>`` for the first free N.

    Raises ``ConflictError`` when no free name is found.
    """
    if not _occupied(path):
        return path
    for counter in range(1, MAX_CONFLICT_ATTEMPTS):
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        if not _occupied(candidate):
            return candidate
    raise ConflictError(
        f"Too many file conflicts, could not generate unique name for {path.name}"
    )


def move_files(
    pdf_path: Path, metadata_path: Path, target_folder: Path
) -> tuple[Path, Optional[Path]]:
    """Move a PDF and its metadata file into *target_folder*.

    Returns the final ``(pdf_destination, metadata_destination)``; the second
    item is ``None`` when there was no metadata file to move. If the metadata
    move fails the PDF is moved back so the pair stays together.
    """
    try:
        target_folder.mkdir(parents=True, exist_ok=True)
        pdf_dest = resolve_conflict(target_folder / pdf_path.name)
        metadata_dest = None
        if metadata_path.exists():
            metadata_dest = resolve_conflict(target_folder / metadata_path.name)
        shutil.move(str(pdf_path), str(pdf_dest))
    except ConflictError:
        raise
    except OSError as exc:
        raise MoveError(f"Failed to move files: {exc}") from exc

    if metadata_dest is None or not metadata_path.exists():
        return pdf_dest, None

    try:
        shutil.move(str(metadata_path), str(metadata_dest))
    except OSError as exc:
        _restore(pdf_dest, pdf_path)
        raise MoveError(f"Failed to move files: {exc}") from exc
    return pdf_dest, metadata_dest


def _restore(moved: Path, original: Path) -> None:
    try:
        shutil.move(str(moved), str(original))
    except OSError as exc:
        log.error("Could not move %s back to %s: %s", moved, original, exc)


# ---------------------------------------------------------------------------
# Per-file processing
# ---------------------------------------------------------------------------


def _skip(task: SortTask, stats: SortStats, reason: str) -> SortTask:
    task.status = "skipped"
    task.reason = reason
    stats.skipped += 1
    log.warning("  %s: %s", task.filename, reason)
    return task


def sort_single_pdf(
    pdf_path: Path,
    target_dir: Path,
    stats: SortStats,
    *,
    dry_run: bool = False,
) -> SortTask:
    """Sort one PDF into its brand/model folder under *target_dir*.

    Never raises; the outcome is recorded on the returned task and in
    *stats*.
    """
    stats.processed += 1
    task = SortTask(pdf_path=pdf_path, metadata_path=metadata_path_for(pdf_path))
    log.info("Processing: %s", task.filename)

    if not task.metadata_path.exists():
        return _skip(task, stats, "no JSON metadata found")

    try:
        task.metadata = load_metadata(task.metadata_path)
    except MetadataError as exc:
        task.status = "error"
        task.error = str(exc)
        stats.errors += 1
        log.error("  Error processing %s: %s", task.filename, exc)
        return task

    brand = sanitize_folder_name(task.metadata.brand)
    model = sanitize_folder_name(task.metadata.model)
    if not brand:
        return _skip(task, stats, "no brand information found")

    task.target_folder = create_target_path(target_dir, brand, model, task.metadata)
    relative = task.target_folder.relative_to(target_dir)

    if pdf_path.parent.resolve() == task.target_folder.resolve():
        return _skip(task, stats, "already in its target folder")

    if dry_run:
        task.status = "planned"
        log.info("  [DRY RUN] Would move to: %s", relative)
        return task

    try:
        task.pdf_destination, task.metadata_destination = move_files(
            pdf_path, task.metadata_path, task.target_folder
        )
    except MoveError as exc:
        task.status = "error"
        task.error = str(exc)
        stats.errors += 1
        log.error("  Error processing %s: %s", task.filename, exc)
        return task

    task.status = "moved"
    stats.moved += 1
    log.info("  Moved to: %s", relative)
    return task


def sort_directory(
    source_dir: Path,
    target_dir: Optional[Path] = None,
    *,
    dry_run: bool = False,
) -> tuple[SortStats, list[SortTask]]:
    """Sort every PDF under *source_dir*. Returns (stats, tasks)."""
    target_dir = target_dir or source_dir
    stats = SortStats()
    tasks = [
        sort_single_pdf(pdf_path, target_dir, stats, dry_run=dry_run)
        for pdf_path in iter_pdfs(source_dir, stats)
    ]
    return stats, tasks


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def summary_lines(stats: SortStats, *, dry_run: bool = False) -> list[str]:
    """Render the end-of-run report."""
    lines = [
        "=" * 50,
        "SORTING SUMMARY",
        "=" * 50,
        f"  Total PDFs processed: {stats.processed}",
        f"  Files moved:          {stats.moved}",
        f"  Files skipped:        {stats.skipped}",
        f"  Errors encountered:   {stats.errors}",
    ]
    if dry_run:
        lines.append("This was a DRY RUN - no files were actually moved")
        lines.append("  Run without --dry-run to perform the actual sorting")
    return lines
