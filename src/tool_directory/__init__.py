"""Tool Directory Tools: data maintenance for the curated tools directory.

The package validates the directory dataset (the monolithic ``tools.json`` and
the optional split per-category files) and keeps slugs and ordering tidy.
"""

__all__ = [
    "__version__",
]

__version__ = "0.2.0"
