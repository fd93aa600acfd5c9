"""Loading of the primary and split tool datasets."""

from .loader import (
    LoadedDataset,
    MalformedDatasetError,
    SplitLoadResult,
    load_dataset,
    load_primary,
    load_split,
)

__all__ = [
    "LoadedDataset",
    "MalformedDatasetError",
    "SplitLoadResult",
    "load_dataset",
    "load_primary",
    "load_split",
]
