"""Shared fixtures for the manual sorter test suite.

Builds small manual libraries (PDF + JSON pairs) under ``tmp_path``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# ---------------------------------------------------------------------------
# Configure verbose logging for test debugging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
    force=True,
)
log = logging.getLogger("conftest")

PDF_BYTES = b"%PDF-1.4\n%sample manual\n"

HONDA = {
    "title": "Honda CBR600RR Service Manual",
    "brand": "Honda",
    "model": "CBR600RR",
    "yearRange": "2003-2006",
    "manualType": "workshop manual",
}
KAWASAKI = {
    "id": "ghi789",
    "title": "Ninja 250 Parts Catalog",
    "brand": "Kawasaki",
    "model": "Ninja 250",
    "year": None,
    "yearRange": None,
    "manualType": "parts catalog",
    "tags": ["parts"],
}
BMW_NO_MODEL = {
    "brand": "BrandName",
    "yearRange": "2013-2016",
    "manualType": "other",
}


def write_manual(
    folder: Path, filename: str, metadata: dict[str, Any] | str | None
) -> Path:
    """Create ``filename`` (a PDF) plus its JSON sidecar inside *folder*.

    A string *metadata* is written verbatim; ``None`` writes no sidecar.
    """
    folder.mkdir(parents=True, exist_ok=True)
    pdf = folder / filename
    pdf.write_bytes(PDF_BYTES)
    if metadata is not None:
        sidecar = pdf.with_suffix(".json")
        text = metadata if isinstance(metadata, str) else json.dumps(metadata)
        sidecar.write_text(text, encoding="utf-8")
    return pdf


@pytest.fixture
def make_manual() -> Callable[..., Path]:
    return write_manual


@pytest.fixture
def manual_library(tmp_path: Path) -> Path:
    """A source directory with a mix of sortable and unsortable manuals.

    Layout::

        incoming/
            Honda_CBR600RR_Service.pdf + .json
            Orphan.pdf                      (no sidecar)
            01-incoming/
                Kawasaki_Parts.PDF + .json
                Broken.pdf + .json          (invalid JSON)
                NoBrand.pdf + .json         (brand missing)
    """
    source = tmp_path / "incoming"
    write_manual(source, "Honda_CBR600RR_Service.pdf", HONDA)
    write_manual(source, "Orphan.pdf", None)
    nested = source / "01-incoming"
    write_manual(nested, "Kawasaki_Parts.PDF", KAWASAKI)
    write_manual(nested, "Broken.pdf", "{not valid json")
    write_manual(nested, "NoBrand.pdf", {"model": "X1", "title": "Mystery"})
    log.info("manual_library fixture created at %s", source)
    return source
