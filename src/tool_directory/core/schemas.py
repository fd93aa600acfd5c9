"""Record shapes for the tools directory dataset.

The primary dataset is ``{"tools": [{"category": str, "content": [tool, ...]}]}``
and each split file is a bare JSON array of tools. A tool is an object with
``title`` and optional ``slug`` and ``url`` keys; anything else is ignored here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .enums import RecordSource


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _clean_url(value: Any) -> Optional[str]:
    text = _optional_text(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


@dataclass(frozen=True)
class ToolRecord:
    """One entry in the directory.

    Attributes:
        title: Display name (may be absent in malformed data).
        slug: URL-safe identifier, absent until the slug command fills it in.
        url: Trimmed link target. Empty or whitespace-only values become None.
        category: Name of the owning category.
        source: Which dataset the record came from.
    """

    title: Optional[str]
    slug: Optional[str]
    url: Optional[str]
    category: str
    source: RecordSource = RecordSource.PRIMARY

    @classmethod
    def from_raw(cls, raw: Any, category: str, source: RecordSource) -> "ToolRecord":
        """Build a record from a decoded JSON value.

        Non-object entries produce a record with no title, slug or URL so the
        validator reports them as missing a URL instead of crashing.

        Examples:
            >>> r = ToolRecord.from_raw({"title": "X", "url": " https://x.io "}, "AI", RecordSource.PRIMARY)
            >>> r.url
            'https://x.io'
        """
        if not isinstance(raw, dict):
            return cls(title=None, slug=None, url=None, category=category, source=source)
        return cls(
            title=_optional_text(raw.get("title")),
            slug=_optional_text(raw.get("slug")) or None,
            url=_clean_url(raw.get("url")),
            category=category,
            source=source,
        )


@dataclass(frozen=True)
class Category:
    """A named group of tool records from one source."""

    name: str
    source: RecordSource
    records: List[ToolRecord] = field(default_factory=list)


@dataclass(frozen=True)
class StructuralAnomaly:
    """A split file whose body is not a JSON array.

    Attributes:
        category: Category name derived from the file name.
        found_type: JSON type of the body, "invalid JSON" if it did not parse, or
            "unreadable file" if it could not be read.
    """

    category: str
    found_type: str


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded value.

    Examples:
        >>> json_type_name({"not": "array"})
        'object'
        >>> json_type_name(None)
        'null'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


__all__ = ["ToolRecord", "Category", "StructuralAnomaly", "json_type_name"]
