# Path: core/datasets/__init__.py
# Purpose: Package initializer for dataset loading utilities.
# Layer: core/datasets.
# Details: Exposes the dataset loader and its result and error types.

from .loader import DatasetLoadError, DatasetLoader, LoadedDataset, read_records, read_tag_list

__all__ = ["DatasetLoadError", "DatasetLoader", "LoadedDataset", "read_records", "read_tag_list"]
