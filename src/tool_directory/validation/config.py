"""Validation configuration constants.

This module centralizes the attribution marker, accepted URL schemes and the
severity of each finding kind. Constants can be overridden per run from a YAML
file (see ``config/validation.yaml``).

Severity Levels:
    - "error": Broken links or malformed data that would render badly on the site
    - "warning": Links that work but need attention (missing ref, duplicates)

Severity only affects how findings are presented; any finding fails the run.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

import yaml

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.utils import SPLIT_EXTENSIONS

# ============================================================================
# RULE CONSTANTS
# ============================================================================

# Query fragment identifying traffic as coming from the directory
REQUIRED_REF = "?ref=riseofmachine.com"

ACCEPTED_SCHEMES = ("http://", "https://")

# Only primary records feed the duplicate index unless enabled
DUPLICATES_SPAN_SOURCES = False


# ============================================================================
# SEVERITY RULES
# ============================================================================

ISSUE_SEVERITY = {
    IssueKind.MISSING_URL: "error",
    IssueKind.MISSING_PROTOCOL: "error",
    IssueKind.MISSING_REF: "warning",
    IssueKind.DUPLICATE_URL: "warning",
    IssueKind.INVALID_STRUCTURE: "error",
}


@dataclass(frozen=True)
class ValidationConfig:
    """Per-run validation settings.

    Attributes:
        required_ref: Marker every URL must contain.
        accepted_schemes: URL prefixes treated as a valid network scheme.
        split_extensions: File extensions picked up from the split directory.
        duplicates_span_sources: Register split records in the duplicate index too.
    """

    required_ref: str = REQUIRED_REF
    accepted_schemes: Tuple[str, ...] = ACCEPTED_SCHEMES
    split_extensions: Tuple[str, ...] = SPLIT_EXTENSIONS
    duplicates_span_sources: bool = DUPLICATES_SPAN_SOURCES

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not self.required_ref:
            raise ValueError("required_ref must be a non-empty string")
        if not self.accepted_schemes:
            raise ValueError("accepted_schemes must list at least one scheme prefix")
        if not self.split_extensions:
            raise ValueError("split_extensions must list at least one extension")

    def tracks_duplicates(self, source: RecordSource) -> bool:
        """Return True if records from ``source`` are registered in the URL index."""
        return source == RecordSource.PRIMARY or self.duplicates_span_sources

    @classmethod
    def from_yaml(cls, config_file: Path) -> "ValidationConfig":
        """Load settings from a YAML mapping, falling back to defaults.

        Args:
            config_file: Path to a YAML file such as ``config/validation.yaml``.

        Returns:
            ValidationConfig with the file's values applied.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a mapping, holds unknown keys or
                holds a value of the wrong type.
        """
        if not config_file.exists():
            raise FileNotFoundError(f"Validation config not found: {config_file}")
        with config_file.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to parse validation config {config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Validation config must be a mapping: {config_file}")

        # Allow the settings to live under a top-level "validation" key
        data = data.get("validation", data) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Validation settings must be a mapping: {config_file}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown validation config keys: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}"
            )

        kwargs = {}
        if "required_ref" in data:
            value = data["required_ref"]
            if not isinstance(value, str):
                raise ValueError(
                    f"required_ref must be a string, got {type(value).__name__}: {config_file}"
                )
            kwargs["required_ref"] = value
        for key in ("accepted_schemes", "split_extensions"):
            if key in data:
                value = data[key]
                if isinstance(value, str):
                    value = [value]
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ValueError(
                        f"{key} must be a string or a list of strings: {config_file}"
                    )
                kwargs[key] = tuple(value)
        if "duplicates_span_sources" in data:
            value = data["duplicates_span_sources"]
            # Quoted "false" would be truthy
            if not isinstance(value, bool):
                raise ValueError(
                    f"duplicates_span_sources must be true or false, got {value!r}: {config_file}"
                )
            kwargs["duplicates_span_sources"] = value
        return cls(**kwargs)


def load_config(config_file: Optional[Path] = None) -> ValidationConfig:
    """Return the config from ``config_file``, or the defaults when it is None."""
    if config_file is None:
        return ValidationConfig()
    return ValidationConfig.from_yaml(config_file)


def get_severity(kind: IssueKind) -> str:
    """Get severity level for a finding kind.

    Args:
        kind: Finding kind (an IssueKind or its string value).

    Returns:
        Severity level: "error" or "warning".

    Raises:
        ValueError: If kind is unknown.

    Examples:
        >>> get_severity(IssueKind.MISSING_URL)
        'error'
        >>> get_severity("missing_ref")
        'warning'
    """
    try:
        kind = IssueKind(kind)
    except ValueError:
        raise ValueError(f"Unknown issue kind: {kind}") from None
    return ISSUE_SEVERITY[kind]
