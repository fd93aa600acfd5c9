"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class RecordSource(str, Enum):
    """Which dataset a tool record was read from.

    Values are strings to ease serialization and CLI interchange.
    """

    PRIMARY = "primary"
    SPLIT = "split"


class IssueKind(str, Enum):
    """Kinds of findings produced by a validation run."""

    MISSING_URL = "missing_url"
    MISSING_PROTOCOL = "missing_protocol"
    MISSING_REF = "missing_ref"
    INVALID_STRUCTURE = "invalid_structure"
    DUPLICATE_URL = "duplicate_url"


__all__ = ["RecordSource", "IssueKind"]
