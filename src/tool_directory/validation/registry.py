"""Validation check registry and runner.

This module orchestrates validation checks:
- ALL_CHECKS: List of all per-record check instances, in evaluation order
- evaluate_record(): Applies the checks to one tool record
- validate_dataset(): Single pass over a loaded dataset, returns ValidationReport
- run_validation(): Loads the dataset files, then validates them
- print_report(): Displays validation results to console
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from tool_directory.ingestion.loader import LoadedDataset, load_dataset
from .checks import RecordCheck
from .checks.attribution_ref import AttributionRefCheck
from .checks.duplicate_urls import UrlIndex
from .checks.protocol import ProtocolCheck
from .checks.url_presence import UrlPresenceCheck
from .config import ValidationConfig
from .models import Finding, ValidationReport

logger = logging.getLogger(__name__)


# Registry of per-record checks
# UrlPresenceCheck must stay first: it halts the others for records without a URL
ALL_CHECKS: List[RecordCheck] = [
    UrlPresenceCheck(),
    ProtocolCheck(),
    AttributionRefCheck(),
]


def evaluate_record(
    record: ToolRecord,
    config: ValidationConfig,
    checks: Optional[Sequence[RecordCheck]] = None,
) -> List[Finding]:
    """Run the applicable checks against one record.

    Args:
        record: Tool record to check.
        config: Active validation settings.
        checks: Checks to apply, in order. Defaults to ALL_CHECKS.

    Returns:
        Findings in check order; empty if the record is clean.

    Examples:
        >>> record = ToolRecord("FTP", None, "ftp://x.com", "misc", RecordSource.PRIMARY)
        >>> [f.kind.value for f in evaluate_record(record, ValidationConfig())]
        ['missing_protocol', 'missing_ref']
    """
    findings: List[Finding] = []
    for check in ALL_CHECKS if checks is None else checks:
        if not check.applies_to_source(record.source):
            continue
        results = check.validate(record, config)
        findings.extend(results)
        if results and check.stops_on_failure:
            break
    return findings


def validate_dataset(
    dataset: LoadedDataset, config: Optional[ValidationConfig] = None
) -> ValidationReport:
    """Validate every record of a loaded dataset exactly once.

    Records are consumed in loader order (primary categories, then split
    files). Per-record findings go to their buckets as they are found; split
    file anomalies are folded in as ``invalid_structure`` findings. Duplicate
    groups are derived after the traversal.

    Args:
        dataset: Output of ``load_dataset()``.
        config: Validation settings. Defaults to ValidationConfig().

    Returns:
        ValidationReport with all findings and record counts.
    """
    config = config or ValidationConfig()
    report = ValidationReport(
        primary_count=dataset.primary_count,
        split_count=dataset.split_count,
        primary_path=dataset.primary_path,
        split_dir=dataset.split_dir,
        required_ref=config.required_ref,
    )
    url_index = UrlIndex()

    for record in dataset.iter_records():
        findings = evaluate_record(record, config)
        for finding in findings:
            report.add(finding)
        if record.url is not None and config.tracks_duplicates(record.source):
            url_index.register(record)

    for anomaly in dataset.anomalies:
        report.add(
            Finding(
                kind=IssueKind.INVALID_STRUCTURE,
                category=anomaly.category,
                source=RecordSource.SPLIT,
                found_type=anomaly.found_type,
            )
        )

    report.duplicates = url_index.duplicate_groups()
    report.unique_urls = len(url_index)
    logger.debug(
        "Validated %d records: %d issues, %d duplicate groups",
        report.primary_count + report.split_count,
        report.issue_count(),
        len(report.duplicates),
    )
    return report


def run_validation(
    primary_path: Path,
    split_dir: Optional[Path] = None,
    config: Optional[ValidationConfig] = None,
) -> ValidationReport:
    """Load the dataset files and validate them.

    Args:
        primary_path: Path to the monolithic ``tools.json``.
        split_dir: Directory of split category files, or None to skip them.
        config: Validation settings. Defaults to ValidationConfig().

    Returns:
        ValidationReport containing aggregated findings.

    Raises:
        MalformedDatasetError: If the primary dataset is missing or malformed.

    Examples:
        >>> from pathlib import Path
        >>> report = run_validation(Path("src/data/tools.json"), Path("src/data/tools"))
        >>> print(report.summary())
    """
    config = config or ValidationConfig()
    dataset = load_dataset(primary_path, split_dir, config.split_extensions)
    return validate_dataset(dataset, config)


def print_report(report: ValidationReport) -> None:
    """Print validation report to console.

    Args:
        report: ValidationReport to display.

    Examples:
        >>> print_report(report)

        📊 Data Validation Report
        ======================================================================
        Total tools processed: 2
        Unique URLs: 2

        ======================================================================
        ✅ All checks passed!
        Summary: 0 issue(s) found
    """
    print(report.to_text())
