"""Attribution marker check.

Outbound links carry a query marker (``?ref=riseofmachine.com``) so tool
vendors can attribute the traffic. Independent of the scheme check.
"""

from __future__ import annotations

from typing import List

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from ..config import ValidationConfig
from ..models import Finding


class AttributionRefCheck:
    """Validate that URLs contain the attribution marker."""

    check_id = IssueKind.MISSING_REF.value
    stops_on_failure = False

    def validate(self, record: ToolRecord, config: ValidationConfig) -> List[Finding]:
        if record.url is None:
            return []
        if config.required_ref in record.url:
            return []
        return [Finding.for_record(IssueKind.MISSING_REF, record)]

    def applies_to_source(self, source: RecordSource) -> bool:
        """Check applies to all sources."""
        return True
