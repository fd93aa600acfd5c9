"""Validation checks base interface.

This module defines the protocol (interface) that all per-record validation
checks implement. Each check inspects one aspect of a tool record (URL
presence, scheme, attribution marker).

To implement a new validation check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class that implements the RecordCheck protocol
3. Implement `validate()` and `applies_to_source()`
4. Add the check to the ALL_CHECKS list in registry.py

Example:
    ```python
    # checks/my_check.py
    from typing import List
    from tool_directory.core.enums import IssueKind, RecordSource
    from tool_directory.core.schemas import ToolRecord
    from ..config import ValidationConfig
    from ..models import Finding

    class MyCheck:
        check_id = "my_check"
        stops_on_failure = False

        def validate(self, record: ToolRecord, config: ValidationConfig) -> List[Finding]:
            return []

        def applies_to_source(self, source: RecordSource) -> bool:
            return True
    ```

Cross-record state (duplicate URLs) lives in `duplicate_urls.UrlIndex` rather
than in a check, because it can only be evaluated after the full traversal.
"""

from __future__ import annotations

from typing import List, Protocol

from tool_directory.core.enums import RecordSource
from tool_directory.core.schemas import ToolRecord
from ..config import ValidationConfig
from ..models import Finding


class RecordCheck(Protocol):
    """Protocol defining the interface for per-record checks.

    Use duck typing (Protocol) for flexibility - no need to inherit from a
    base class.

    Attributes:
        check_id: Identifier matching the IssueKind value the check emits.
        stops_on_failure: If True, later checks are skipped for a record this
            check flagged.
    """

    check_id: str
    stops_on_failure: bool

    def validate(self, record: ToolRecord, config: ValidationConfig) -> List[Finding]:
        """Run the check against one record.

        Returns:
            List of findings; empty if the record passes.
        """
        ...

    def applies_to_source(self, source: RecordSource) -> bool:
        """Return True if the check should run for records from ``source``."""
        ...


__all__ = ["RecordCheck"]
