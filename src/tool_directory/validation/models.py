"""Validation data models.

This module defines core data structures for validation results:
- Finding: One issue found in a tool record or split file
- DuplicateGroup: A URL declared by more than one tool
- ValidationReport: Aggregated findings from a validation run, with renderers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from .config import REQUIRED_REF, get_severity

RULE = "=" * 70

# Fixed order of the per-record and structural buckets
BUCKET_ORDER = (
    IssueKind.MISSING_URL,
    IssueKind.MISSING_PROTOCOL,
    IssueKind.MISSING_REF,
    IssueKind.INVALID_STRUCTURE,
)

SEVERITY_ICONS = {"error": "❌", "warning": "⚠️ "}


def _show(value: Optional[str]) -> str:
    return "(none)" if value is None else value


@dataclass(frozen=True)
class Finding:
    """A single validation finding.

    Attributes:
        kind: Which issue bucket the finding belongs to.
        category: Owning category (for split files, the file-derived name).
        title: Tool title, when the finding concerns a record.
        slug: Tool slug, when present.
        url: Trimmed URL for protocol/ref findings.
        source: Dataset the finding came from.
        found_type: JSON type of an unexpected split-file body.

    Examples:
        >>> Finding(kind=IssueKind.INVALID_STRUCTURE, category="chat",
        ...         source=RecordSource.SPLIT, found_type="object")
    """

    kind: IssueKind
    category: str
    title: Optional[str] = None
    slug: Optional[str] = None
    url: Optional[str] = None
    source: RecordSource = RecordSource.PRIMARY
    found_type: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.kind == IssueKind.DUPLICATE_URL:
            raise ValueError("Duplicate URLs are reported as DuplicateGroup, not Finding")
        if self.kind == IssueKind.INVALID_STRUCTURE and self.found_type is None:
            raise ValueError("invalid_structure findings require found_type")

    @classmethod
    def for_record(cls, kind: IssueKind, record: ToolRecord, with_url: bool = True) -> "Finding":
        """Build a finding that carries a record's identifying fields."""
        return cls(
            kind=kind,
            category=record.category,
            title=record.title,
            slug=record.slug,
            url=record.url if with_url else None,
            source=record.source,
        )

    def to_dict(self) -> Dict[str, Optional[str]]:
        data: Dict[str, Optional[str]] = {"category": self.category, "source": self.source.value}
        if self.kind == IssueKind.INVALID_STRUCTURE:
            data["found_type"] = self.found_type
            return data
        data["title"] = self.title
        data["slug"] = self.slug
        if self.kind != IssueKind.MISSING_URL:
            data["url"] = self.url
        return data


@dataclass(frozen=True)
class DuplicateGroup:
    """A URL registered by more than one tool record."""

    url: str
    owners: List[ToolRecord]

    @property
    def count(self) -> int:
        return len(self.owners)


def _empty_buckets() -> Dict[IssueKind, List[Finding]]:
    return {kind: [] for kind in BUCKET_ORDER}


@dataclass
class ValidationReport:
    """Aggregated validation results for a dataset.

    Attributes:
        buckets: Findings per issue kind, in discovery order.
        duplicates: Duplicate URL groups, largest first.
        primary_count: Number of records read from the primary dataset.
        split_count: Number of records read from split files.
        unique_urls: Number of distinct URLs in the duplicate index.
        primary_path: Path to the primary dataset (if known).
        split_dir: Path to the split directory (if used).
        required_ref: Attribution marker the run checked for.

    Examples:
        >>> report = ValidationReport(primary_count=3, unique_urls=3)
        >>> report.passed
        True
        >>> report.issue_count()
        0
    """

    buckets: Dict[IssueKind, List[Finding]] = field(default_factory=_empty_buckets)
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    primary_count: int = 0
    split_count: int = 0
    unique_urls: int = 0
    primary_path: Optional[Path] = None
    split_dir: Optional[Path] = None
    required_ref: str = REQUIRED_REF

    def __post_init__(self) -> None:
        for kind in BUCKET_ORDER:
            self.buckets.setdefault(kind, [])

    def add(self, finding: Finding) -> None:
        """Append a finding to its bucket."""
        self.buckets[finding.kind].append(finding)

    def findings(self, kind: IssueKind) -> List[Finding]:
        return self.buckets.get(kind, [])

    def issue_count(self) -> int:
        """Count issues: every bucket entry plus one per duplicate group."""
        return sum(len(items) for items in self.buckets.values()) + len(self.duplicates)

    def has_issues(self) -> bool:
        return self.issue_count() > 0

    @property
    def passed(self) -> bool:
        return not self.has_issues()

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Records: 120 primary, 14 split (98 unique URLs)
              Issues: 3 (missing_url=1, missing_protocol=0, missing_ref=2, invalid_structure=0, duplicate_url=0)
        """
        counts = ", ".join(f"{kind.value}={len(self.findings(kind))}" for kind in BUCKET_ORDER)
        return (
            f"Validation Summary:\n"
            f"  Records: {self.primary_count} primary, {self.split_count} split "
            f"({self.unique_urls} unique URLs)\n"
            f"  Issues: {self.issue_count()} ({counts}, "
            f"{IssueKind.DUPLICATE_URL.value}={len(self.duplicates)})"
        )

    def to_text(self) -> str:
        """Render the deterministic console report.

        The output depends only on the report contents, so two runs over the
        same dataset produce identical text.
        """
        split_note = f" (+ {self.split_count} split)" if self.split_count > 0 else ""
        lines = [
            "",
            "📊 Data Validation Report",
            RULE,
            f"Total tools processed: {self.primary_count}{split_note}",
            f"Unique URLs: {self.unique_urls}",
            "",
        ]

        def header(kind: IssueKind, label: str, count: int) -> str:
            return f"{SEVERITY_ICONS[get_severity(kind)]} {label} ({count}):"

        missing_url = self.findings(IssueKind.MISSING_URL)
        if missing_url:
            lines.append(header(IssueKind.MISSING_URL, "Missing URLs", len(missing_url)))
            for i, f in enumerate(missing_url, 1):
                lines.append(
                    f'   {i}. "{_show(f.title)}" (slug: {_show(f.slug)}, category: {f.category})'
                )
            lines.append("")

        missing_protocol = self.findings(IssueKind.MISSING_PROTOCOL)
        if missing_protocol:
            lines.append(
                header(IssueKind.MISSING_PROTOCOL, "Missing HTTP/HTTPS", len(missing_protocol))
            )
            for i, f in enumerate(missing_protocol, 1):
                lines.append(f'   {i}. "{_show(f.title)}" → {f.url}')
            lines.append("")

        missing_ref = self.findings(IssueKind.MISSING_REF)
        if missing_ref:
            lines.append(header(IssueKind.MISSING_REF, f"Missing {self.required_ref}", len(missing_ref)))
            for i, f in enumerate(missing_ref, 1):
                lines.append(f'   {i}. "{_show(f.title)}" → {f.url}')
            lines.append("")

        if self.duplicates:
            lines.append(header(IssueKind.DUPLICATE_URL, "Duplicate URLs", len(self.duplicates)))
            for i, group in enumerate(self.duplicates, 1):
                lines.append(f"   {i}. {group.url}")
                lines.append(f"      Count: {group.count} tools")
                for j, tool in enumerate(group.owners, 1):
                    lines.append(
                        f'      {j}. "{_show(tool.title)}" '
                        f"(slug: {_show(tool.slug)}, category: {tool.category})"
                    )
            lines.append("")

        invalid = self.findings(IssueKind.INVALID_STRUCTURE)
        if invalid:
            lines.append(
                header(IssueKind.INVALID_STRUCTURE, "Invalid Structure in Split Files", len(invalid))
            )
            for i, f in enumerate(invalid, 1):
                lines.append(
                    f'   {i}. Category: "{f.category}" - Expected Array, got {f.found_type}'
                )
            lines.append("")

        lines.append(RULE)
        if self.passed:
            lines.append("✅ All checks passed!")
        lines.append(f"Summary: {self.issue_count()} issue(s) found")
        lines.append("")
        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Generate detailed Markdown validation report.

        Returns:
            Formatted Markdown string with a summary table and one section per
            non-empty issue kind.

        Examples:
            >>> markdown = report.to_markdown()
            >>> with open("validation_report.md", "w") as f:
            ...     f.write(markdown)
        """
        from datetime import datetime

        name = self.primary_path.name if self.primary_path else "tools.json"
        lines = [
            f"# Validation Report: {name}",
            "",
            f"**Primary dataset:** {self.primary_path or '-'}",
            f"**Split directory:** {self.split_dir or '-'}",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Primary records:** {self.primary_count}",
            f"- **Split records:** {self.split_count}",
            f"- **Unique URLs:** {self.unique_urls}",
            f"- **Issues:** {self.issue_count()} ❌" if self.has_issues() else "- **Issues:** 0",
            "",
        ]

        if self.passed:
            lines.append("## ✅ All Checks Passed")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
        else:
            for kind in BUCKET_ORDER:
                items = self.findings(kind)
                if not items:
                    continue
                icon = SEVERITY_ICONS[get_severity(kind)].strip()
                lines.append(f"## {icon} {kind.value} ({len(items)})")
                lines.append("")
                for f in items:
                    if kind == IssueKind.INVALID_STRUCTURE:
                        lines.append(f"- `{f.category}`: expected array, got {f.found_type}")
                    elif kind == IssueKind.MISSING_URL:
                        lines.append(
                            f"- **{_show(f.title)}** (slug: `{_show(f.slug)}`, "
                            f"category: {f.category}, source: {f.source.value})"
                        )
                    else:
                        lines.append(
                            f"- **{_show(f.title)}** → `{f.url}` "
                            f"(category: {f.category}, source: {f.source.value})"
                        )
                lines.append("")
            if self.duplicates:
                icon = SEVERITY_ICONS[get_severity(IssueKind.DUPLICATE_URL)].strip()
                lines.append(f"## {icon} {IssueKind.DUPLICATE_URL.value} ({len(self.duplicates)})")
                lines.append("")
                for group in self.duplicates:
                    lines.append(f"### `{group.url}` ({group.count} tools)")
                    lines.append("")
                    for tool in group.owners:
                        lines.append(
                            f"- **{_show(tool.title)}** (slug: `{_show(tool.slug)}`, "
                            f"category: {tool.category})"
                        )
                    lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate detailed JSON validation report.

        Returns:
            Formatted JSON string with validation results.
        """
        import json
        from datetime import datetime

        report_data = {
            "metadata": {
                "primary_path": str(self.primary_path) if self.primary_path else None,
                "split_dir": str(self.split_dir) if self.split_dir else None,
                "required_ref": self.required_ref,
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "primary_records": self.primary_count,
                "split_records": self.split_count,
                "unique_urls": self.unique_urls,
                "issues": self.issue_count(),
                "passed": self.passed,
            },
            "issues": {
                kind.value: [f.to_dict() for f in self.findings(kind)] for kind in BUCKET_ORDER
            },
            "duplicates": [
                {
                    "url": group.url,
                    "count": group.count,
                    "tools": [
                        {"title": t.title, "slug": t.slug, "category": t.category}
                        for t in group.owners
                    ],
                }
                for group in self.duplicates
            ],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)
