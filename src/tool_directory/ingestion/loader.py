"""Dataset loader for the tools directory.

Reads the primary ``tools.json`` and, optionally, the split per-category files,
and normalizes both into lists of :class:`Category`. No business rules live
here; the only thing the loader judges is whether a file has the expected
top-level shape.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from tool_directory.core.enums import RecordSource
from tool_directory.core.schemas import Category, StructuralAnomaly, ToolRecord, json_type_name
from tool_directory.core.utils import SPLIT_EXTENSIONS, category_from_filename

logger = logging.getLogger(__name__)


class MalformedDatasetError(ValueError):
    """The primary dataset is missing, unreadable or lacks a ``tools`` array."""


@dataclass
class SplitLoadResult:
    """Categories read from a split directory plus per-file structure anomalies."""

    categories: List[Category] = field(default_factory=list)
    anomalies: List[StructuralAnomaly] = field(default_factory=list)


@dataclass
class LoadedDataset:
    """Both record streams of one validation run."""

    primary: List[Category]
    split: List[Category] = field(default_factory=list)
    anomalies: List[StructuralAnomaly] = field(default_factory=list)
    primary_path: Optional[Path] = None
    split_dir: Optional[Path] = None

    @property
    def primary_count(self) -> int:
        return sum(len(c.records) for c in self.primary)

    @property
    def split_count(self) -> int:
        return sum(len(c.records) for c in self.split)

    def iter_records(self) -> Iterator[ToolRecord]:
        """Yield primary records, then split records, in traversal order."""
        for category in self.primary:
            yield from category.records
        for category in self.split:
            yield from category.records


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_primary(path: Path) -> List[Category]:
    """Load the monolithic dataset.

    Args:
        path: Path to ``tools.json``.

    Returns:
        Categories in file order, each with its records in list order.

    Raises:
        MalformedDatasetError: If the file cannot be read or parsed, or its
            root is not an object with a ``tools`` array.
    """
    try:
        data = _read_json(path)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise MalformedDatasetError(f"Failed to read dataset {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("tools"), list):
        raise MalformedDatasetError(f"Invalid dataset structure in {path}: expected a 'tools' array")

    categories: List[Category] = []
    for entry in data["tools"]:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object category entry (%s)", json_type_name(entry))
            continue
        raw_name = entry.get("category")
        name = "" if raw_name is None else str(raw_name)
        content = entry.get("content")
        if not isinstance(content, list):
            logger.warning("Category %r has no content array; skipping", name)
            continue
        records = [ToolRecord.from_raw(raw, name, RecordSource.PRIMARY) for raw in content]
        categories.append(Category(name=name, source=RecordSource.PRIMARY, records=records))
        logger.debug("Loaded %d tools from category %r", len(records), name)
    return categories


def _split_files(directory: Path, extensions: Iterable[str]) -> List[Path]:
    suffixes: Tuple[str, ...] = tuple(extensions)
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffixes))


def load_split(directory: Path, extensions: Iterable[str] = SPLIT_EXTENSIONS) -> SplitLoadResult:
    """Load split per-category files from a directory.

    Each ``<category>.json`` file must hold a bare array of tools. A file with
    any other body is recorded as a StructuralAnomaly and skipped;
    one bad file never aborts the run.

    Args:
        directory: Directory holding the split files. A missing directory
            yields an empty result.
        extensions: File suffixes to pick up.

    Returns:
        SplitLoadResult with categories in filename order.
    """
    result = SplitLoadResult()
    if not directory.is_dir():
        logger.debug("Split directory not found: %s", directory)
        return result

    for path in _split_files(directory, extensions):
        name = category_from_filename(path)
        try:
            body = _read_json(path)
        except OSError as e:
            logger.warning("Could not read split file %s: %s", path.name, e)
            result.anomalies.append(StructuralAnomaly(category=name, found_type="unreadable file"))
            continue
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            logger.info("Split file %s is not valid JSON: %s", path.name, e)
            result.anomalies.append(StructuralAnomaly(category=name, found_type="invalid JSON"))
            continue

        if not isinstance(body, list):
            logger.info("Split file %s is not an array", path.name)
            result.anomalies.append(StructuralAnomaly(category=name, found_type=json_type_name(body)))
            continue

        records = [ToolRecord.from_raw(raw, name, RecordSource.SPLIT) for raw in body]
        result.categories.append(Category(name=name, source=RecordSource.SPLIT, records=records))
        logger.debug("Loaded %d tools from split file %s", len(records), path.name)
    return result


def load_dataset(
    primary_path: Path,
    split_dir: Optional[Path] = None,
    extensions: Iterable[str] = SPLIT_EXTENSIONS,
) -> LoadedDataset:
    """Load the primary dataset and, when given, the split directory.

    Raises:
        MalformedDatasetError: If the primary dataset is unusable.
    """
    primary = load_primary(primary_path)
    dataset = LoadedDataset(primary=primary, primary_path=primary_path)
    if split_dir is not None:
        split = load_split(split_dir, extensions)
        dataset.split = split.categories
        dataset.anomalies = split.anomalies
        dataset.split_dir = split_dir
    logger.info(
        "Loaded %d primary tools in %d categories, %d split tools in %d files",
        dataset.primary_count,
        len(dataset.primary),
        dataset.split_count,
        len(dataset.split),
    )
    return dataset
