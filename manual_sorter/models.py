"""Shared data models for the sorter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

KNOWN_METADATA_KEYS = ("brand", "model", "year", "yearRange", "manualType")


@dataclass
class MetadataRecord:
    """Sidecar metadata describing a single PDF manual."""

    brand: Any = None
    model: Any = None
    year: Any = None
    year_range: Any = None
    manual_type: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> MetadataRecord:
        """Build a record from a parsed JSON value.

        Anything other than a JSON object yields an empty record.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            brand=data.get("brand"),
            model=data.get("model"),
            year=data.get("year"),
            year_range=data.get("yearRange"),
            manual_type=data.get("manualType"),
            extra={k: v for k, v in data.items() if k not in KNOWN_METADATA_KEYS},
        )


@dataclass
class SortTask:
    """Tracks the outcome of sorting a single PDF."""

    pdf_path: Path
    metadata_path: Path
    metadata: Optional[MetadataRecord] = None
    target_folder: Optional[Path] = None
    pdf_destination: Optional[Path] = None
    metadata_destination: Optional[Path] = None
    status: str = "pending"
    reason: str = ""
    error: Optional[str] = None

    @property
    def filename(self) -> str:
        return self.pdf_path.name


@dataclass
class SortStats:
    """Counters for one sorting run."""

    processed: int = 0
    moved: int = 0
    skipped: int = 0
    errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "processed": self.processed,
            "moved": self.moved,
            "skipped": self.skipped,
            "errors": self.errors,
        }
