"""Exception types raised by the sorter."""

from __future__ import annotations


class SorterError(Exception):
    """Base class for recoverable per-file failures."""


class MetadataError(SorterError):
    """The companion metadata file could not be read or parsed."""


class MoveError(SorterError):
    """Moving a manual (or its metadata) into the target folder failed."""


class ConflictError(MoveError):
    """No free destination name was found for a file."""
