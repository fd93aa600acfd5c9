"""URL scheme check.

Links must start with an accepted network scheme (http:// or https:// by
default); bare domains are resolved relative to the site by browsers.
"""

from __future__ import annotations

from typing import List

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from ..config import ValidationConfig
from ..models import Finding


class ProtocolCheck:
    """Validate that URLs carry an accepted scheme prefix."""

    check_id = IssueKind.MISSING_PROTOCOL.value
    stops_on_failure = False

    def validate(self, record: ToolRecord, config: ValidationConfig) -> List[Finding]:
        if record.url is None:
            return []
        if record.url.startswith(config.accepted_schemes):
            return []
        return [Finding.for_record(IssueKind.MISSING_PROTOCOL, record)]

    def applies_to_source(self, source: RecordSource) -> bool:
        """Check applies to all sources."""
        return True
