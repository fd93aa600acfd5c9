"""Duplicate URL detection.

The same link listed under several titles usually means a tool was added
twice. Detection needs the whole dataset, so records are registered during the
traversal and groups are derived once it finishes.
"""

from __future__ import annotations

from typing import Dict, List

from tool_directory.core.schemas import ToolRecord
from ..models import DuplicateGroup


class UrlIndex:
    """Insertion-ordered mapping from URL to the records declaring it."""

    def __init__(self) -> None:
        self._owners: Dict[str, List[ToolRecord]] = {}

    def register(self, record: ToolRecord) -> None:
        """Register a record under its (already trimmed) URL."""
        if record.url is None:
            raise ValueError(f"Cannot index a record without URL: {record.title!r}")
        self._owners.setdefault(record.url, []).append(record)

    def __len__(self) -> int:
        return len(self._owners)

    def owners(self, url: str) -> List[ToolRecord]:
        return list(self._owners.get(url, []))

    def duplicate_groups(self) -> List[DuplicateGroup]:
        """Return URLs with more than one owner, largest groups first.

        The sort is stable, so groups of equal size keep the order in which
        their URL was first seen.
        """
        groups = [
            DuplicateGroup(url=url, owners=list(owners))
            for url, owners in self._owners.items()
            if len(owners) > 1
        ]
        return sorted(groups, key=lambda g: g.count, reverse=True)
