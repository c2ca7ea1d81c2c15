"""PDF manual discovery on the local filesystem."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .models import SortStats
from .utils import is_pdf, is_target_directory

log = logging.getLogger(__name__)


def iter_pdfs(
    root: Path,
    stats: SortStats,
    _visited: set[tuple[int, int]] | None = None,
) -> Iterator[Path]:
    """Recursively yield PDF files under *root*.

    Subdirectories whose names look like sorted target folders are not
    descended into, and a directory reached twice through symlinks is walked
    only once. A directory or entry that cannot be inspected is logged and
    counted in ``stats.errors``; its siblings are still visited.
    """
    if _visited is None:
        _visited = set()
    try:
        st = os.stat(root)
        key = (st.st_dev, st.st_ino)
        if key in _visited:
            log.warning("Skipping already visited directory: %s", root)
            return
        _visited.add(key)
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        log.error("Error processing directory %s: %s", root, exc)
        stats.errors += 1
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            log.error("Error processing entry %s: %s", path, exc)
            stats.errors += 1
            continue

        if is_dir:
            if is_target_directory(entry.name):
                log.info("Skipping existing target directory: %s", entry.name)
                continue
            yield from iter_pdfs(path, stats, _visited)
        elif is_file and is_pdf(path):
            yield path


def discover_pdfs(root: Path) -> list[Path]:
    """Return every PDF :func:`iter_pdfs` would visit under *root*."""
    if not root.is_dir():
        return []
    return list(iter_pdfs(root, SortStats()))
