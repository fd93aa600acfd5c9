"""Validation system for Tool Directory Tools.

This module provides the dataset validation framework:

- **Models**: Finding, DuplicateGroup, ValidationReport - validation result data structures
- **Checks**: Per-record check implementations (see validation/checks/)
- **Config**: Attribution marker, accepted schemes and severity rules (import from .config)
- **Registry**: run_validation(), print_report() - check orchestration and execution

Public API:
    Finding: One issue found in a record or split file
    ValidationReport: Aggregated validation results with renderers
    ValidationConfig: Per-run settings, optionally loaded from YAML
    run_validation: Load and validate the primary dataset and split files
    print_report: Display validation results to console

Usage:
    >>> from tool_directory.validation import run_validation, print_report
    >>> from pathlib import Path
    >>> report = run_validation(Path("src/data/tools.json"), Path("src/data/tools"))
    >>> print_report(report)

For implementation details:
    - See validation/checks/__init__.py for check interface conventions
    - See validation/config.py for rule constants and severity configuration
    - See validation/registry.py for check orchestration
"""

from __future__ import annotations

from tool_directory.core.enums import IssueKind, RecordSource

from .config import ValidationConfig, load_config
from .models import DuplicateGroup, Finding, ValidationReport
from .registry import print_report, run_validation, validate_dataset

__all__ = [
    # Data models
    "Finding",
    "DuplicateGroup",
    "ValidationReport",
    "ValidationConfig",
    "load_config",
    # Runner functions
    "run_validation",
    "validate_dataset",
    "print_report",
    # Enums
    "IssueKind",
    "RecordSource",
]
