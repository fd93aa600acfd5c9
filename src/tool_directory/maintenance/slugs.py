"""Slug generation and ordering for the primary dataset.

Fills in missing ``slug`` fields from titles and sorts each category's tools by
title, then writes ``tools.json`` back. This is the only code path in the
package that modifies the dataset.
"""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w-]+", re.ASCII)
_MULTI_HYPHEN = re.compile(r"--+")


def slugify(text: str) -> str:
    """Turn a title into a URL-safe slug.

    Examples:
        >>> slugify("  Stable Diffusion XL ")
        'stable-diffusion-xl'
        >>> slugify("Notion AI (Beta)!")
        'notion-ai-beta'
        >>> slugify("--C++ -- Tools--")
        'c-tools'
    """
    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_WORD.sub("", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    return slug.strip("-")


def title_sort_key(title: Any) -> Tuple[str, str]:
    """Collation key approximating locale-aware title comparison.

    Primary order ignores case and accents; ties put lowercase before uppercase.

    Examples:
        >>> sorted(["beta", "Alpha", "Écrire", "alpha"], key=title_sort_key)
        ['alpha', 'Alpha', 'beta', 'Écrire']
    """
    text = "" if title is None else str(title)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.swapcase()


@dataclass
class SlugUpdate:
    """What a normalization pass changed."""

    generated: List[Tuple[str, str]] = field(default_factory=list)
    sorted_categories: List[str] = field(default_factory=list)

    @property
    def modified(self) -> bool:
        return bool(self.generated or self.sorted_categories)


def normalize_dataset(data: Dict[str, Any]) -> SlugUpdate:
    """Generate missing slugs and sort every category in place.

    Args:
        data: Decoded primary dataset (``{"tools": [...]}``).

    Returns:
        SlugUpdate listing generated (title, slug) pairs and re-sorted categories.

    Raises:
        ValueError: If ``data`` has no ``tools`` array.
    """
    tools = data.get("tools") if isinstance(data, dict) else None
    if not isinstance(tools, list):
        raise ValueError("Invalid dataset structure: expected a 'tools' array")

    update = SlugUpdate()
    for category in tools:
        if not isinstance(category, dict) or not isinstance(category.get("content"), list):
            continue
        content: List[Any] = category["content"]

        for tool in content:
            if isinstance(tool, dict) and not tool.get("slug") and tool.get("title"):
                tool["slug"] = slugify(tool["title"])
                update.generated.append((str(tool["title"]), tool["slug"]))
                logger.info("Generated slug for %s: %s", tool["title"], tool["slug"])

        ordered = sorted(
            content, key=lambda t: title_sort_key(t.get("title") if isinstance(t, dict) else None)
        )
        if ordered != content:
            content[:] = ordered
            name = str(category.get("category", ""))
            update.sorted_categories.append(name)
            logger.info("Sorted tools in category: %s", name)
    return update


def update_slugs(path: Path, dry_run: bool = False) -> SlugUpdate:
    """Normalize the dataset file and persist it when anything changed.

    Args:
        path: Path to ``tools.json``.
        dry_run: Report changes without writing the file.

    Returns:
        SlugUpdate describing the changes.

    Raises:
        OSError: If the file cannot be read or written.
        ValueError: If the file is not valid JSON or lacks a ``tools`` array.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse dataset {path}: {e}") from e

    update = normalize_dataset(data)
    if not update.modified:
        logger.info("%s already up to date (slugs & sorting)", path.name)
        return update
    if dry_run:
        logger.info(
            "Dry run: %d slugs and %d categories would change in %s",
            len(update.generated),
            len(update.sorted_categories),
            path.name,
        )
        return update

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info("Updated %s (slugs & sorting)", path.name)
    return update
