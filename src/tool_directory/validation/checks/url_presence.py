"""URL presence check.

A tool without a link cannot be rendered as a card. Records with no URL are not
classified further, so this check halts the remaining checks for the record.
"""

from __future__ import annotations

from typing import List

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from ..config import ValidationConfig
from ..models import Finding


class UrlPresenceCheck:
    """Validate that every record has a non-empty URL."""

    check_id = IssueKind.MISSING_URL.value
    stops_on_failure = True

    def validate(self, record: ToolRecord, config: ValidationConfig) -> List[Finding]:
        """Flag records whose trimmed URL is absent or empty."""
        if record.url is None:
            return [Finding.for_record(IssueKind.MISSING_URL, record, with_url=False)]
        return []

    def applies_to_source(self, source: RecordSource) -> bool:
        """Check applies to all sources."""
        return True
