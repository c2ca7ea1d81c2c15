"""Walk-through of how metadata files map onto sorted folders.

Usage:
    manual-sorter-demo
    manual-sorter-demo --check
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .models import MetadataRecord
from .sorter import build_folder_name
from .utils import METADATA_SUFFIX, sanitize_folder_name

log = logging.getLogger(__name__)

EXAMPLES: list[dict[str, Any]] = [
    {
        "filename": "Honda_CBR600RR_Service.pdf",
        "metadata": {
            "title": "Honda CBR600RR Service Manual",
            "brand": "Honda",
            "model": "CBR600RR",
            "yearRange": "2003-2006",
            "manualType": "workshop manual",
        },
        "result_folder": "Honda_CBR600RR_2003-2006_workshop_manual",
    },
    {
        "filename": "Yamaha_R1_Owner.pdf",
        "metadata": {
            "title": "YZF-R1 Owner's Manual",
            "brand": "Yamaha",
            "model": "YZF-R1",
            "year": 2009,
            "manualType": "owner manual",
        },
        "result_folder": "Yamaha_YZF-R1_2009_owner_manual",
    },
    {
        "filename": "Kawasaki_Parts.pdf",
        "metadata": {
            "id": "ghi789",
            "title": "Ninja 250 Parts Catalog",
            "brand": "Kawasaki",
            "model": "Ninja 250",
            "year": None,
            "yearRange": None,
            "manualType": "parts catalog",
            "bikeType": ["sport"],
            "language": "en",
            "tags": ["parts"],
            "description": "Parts catalog for Ninja 250",
        },
        "result_folder": "Kawasaki_Ninja_250_parts_catalog",
    },
    {
        "filename": "BMW_Manual.pdf",
        "metadata": {
            "id": "jkl012",
            "title": "R1200GS Manual",
            "brand": "BMW",
            "model": "R1200GS",
            "year": None,
            "yearRange": "2013-2016",
            "manualType": "other",
            "bikeType": ["adventure"],
            "language": "en",
            "tags": ["bmw"],
            "description": "Service information for R1200GS",
        },
        "result_folder": "BMW_R1200GS_2013-2016",
    },
]


def folder_for(metadata: dict[str, Any]) -> str:
    """Derive the folder name a metadata document sorts into."""
    record = MetadataRecord.from_dict(metadata)
    return build_folder_name(
        sanitize_folder_name(record.brand),
        sanitize_folder_name(record.model),
        record,
    )


def render_examples() -> str:
    parts = ["Manual Sorter - Demo Examples", "=" * 40, ""]
    for index, example in enumerate(EXAMPLES, start=1):
        metadata_name = Path(example["filename"]).with_suffix(METADATA_SUFFIX).name
        parts.append(f"{index}. {example['filename']} + {metadata_name}")
        parts.append("   JSON content:")
        for line in json.dumps(example["metadata"], indent=3).splitlines():
            parts.append(f"   {line}")
        parts.append(f"   Result folder: {example['result_folder']}/")
        parts.append(f"   |-- {example['filename']}")
        parts.append(f"   `-- {metadata_name}")
        parts.append("")
    parts.extend(
        [
            "Folder names follow the Brand_Model_Year_Type pattern.",
            "",
            "Preview what would happen (safe to run):",
            '  manual-sorter --dry-run "/path/to/your/manuals"',
            "Sort files in the same directory:",
            '  manual-sorter "/path/to/your/manuals"',
        ]
    )
    return "\n".join(parts)


def check_examples() -> list[tuple[str, str, str]]:
    """Return (filename, generated, expected) for every example."""
    return [
        (example["filename"], folder_for(example["metadata"]), example["result_folder"])
        for example in EXAMPLES
    ]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="manual-sorter-demo",
        description="Show how metadata files map onto sorted folders",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Derive each example folder and compare it with the expected name",
    )
    args = parser.parse_args(argv)
    print(render_examples())

    if not args.check:
        return

    print()
    print("Testing folder name generation:")
    mismatches = 0
    for index, (filename, generated, expected) in enumerate(check_examples(), start=1):
        ok = generated == expected
        mismatches += not ok
        print(f"{index}. {filename}")
        print(f"   Generated: {generated}")
        print(f"   Expected:  {expected}")
        print(f"   Match: {'yes' if ok else 'NO'}")
    if mismatches:
        log.error("%s example(s) did not match", mismatches)
        sys.exit(1)
