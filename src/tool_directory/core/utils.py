"""Core utility functions for Tool Directory Tools.

This module provides shared utilities used across the project.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("src/data")
PRIMARY_FILENAME = "tools.json"
SPLIT_DIRNAME = "tools"

# Split files with other extensions are ignored
SPLIT_EXTENSIONS = (".json",)


def get_data_paths(data_root: Path) -> tuple[Path, Path]:
    """Get the primary dataset and split directory paths under a data root.

    Follows the site's layout:
    - Primary: {data_root}/tools.json
    - Split:   {data_root}/tools/<category>.json

    Args:
        data_root: Directory holding the site data (e.g. ``src/data``).

    Returns:
        A tuple of (primary_path, split_dir).

    Examples:
        >>> primary, split = get_data_paths(Path("src/data"))
        >>> print(primary)
        src/data/tools.json
        >>> print(split)
        src/data/tools
    """
    return data_root / PRIMARY_FILENAME, data_root / SPLIT_DIRNAME


def category_from_filename(path: Path) -> str:
    """Derive a category name from a split file by stripping its extension.

    Examples:
        >>> category_from_filename(Path("src/data/tools/image-generation.json"))
        'image-generation'
    """
    return path.stem
