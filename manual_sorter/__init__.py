"""Sort PDF manuals into brand/model folders from their JSON metadata.

Public API -- all symbols that tests and external code import live here.
Internally the code is split across focused submodules; this file
re-exports the stable public surface so ``from manual_sorter import X`` works.
"""

from .errors import ConflictError, MetadataError, MoveError, SorterError
from .models import MetadataRecord, SortStats, SortTask
from .sorter import (
    build_folder_name,
    create_target_path,
    move_files,
    resolve_conflict,
    sort_directory,
    sort_single_pdf,
    summary_lines,
)
from .sources import discover_pdfs, iter_pdfs
from .utils import (
    MAX_CONFLICT_ATTEMPTS,
    MAX_FOLDER_NAME_LENGTH,
    is_target_directory,
    load_metadata,
    metadata_path_for,
    sanitize_folder_name,
    save_sort_report,
)

__all__ = [
    # Models
    "MetadataRecord",
    "SortTask",
    "SortStats",
    # Errors
    "SorterError",
    "MetadataError",
    "MoveError",
    "ConflictError",
    # Constants
    "MAX_FOLDER_NAME_LENGTH",
    "MAX_CONFLICT_ATTEMPTS",
    # Utils
    "sanitize_folder_name",
    "is_target_directory",
    "metadata_path_for",
    "load_metadata",
    "save_sort_report",
    # Sources
    "iter_pdfs",
    "discover_pdfs",
    # Sorting
    "build_folder_name",
    "create_target_path",
    "resolve_conflict",
    "move_files",
    "sort_single_pdf",
    "sort_directory",
    "summary_lines",
]
