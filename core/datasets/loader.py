# Path: core/datasets/loader.py
# Purpose: Load record datasets and the non-generic tag whitelist from JSON files.
# Layer: core/datasets.
# Details: Failures are reported on the returned LoadedDataset instead of propagating to callers.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional

from tqdm import tqdm

from config.settings import DatasetSettings
from core.models.domain import ImageRecord

logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when a records file cannot be read or does not hold a list of records."""


@dataclass
class LoadedDataset:
    """Records and whitelist of one dataset, or the reason they could not be loaded."""

    records: List[ImageRecord] = field(default_factory=list)
    non_generic_tags: List[str] = field(default_factory=list)
    dataset: str = "default"
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def whitelist(self) -> Optional[FrozenSet[str]]:
        """The non-generic tags as a whitelist, or None when no list was available."""

        return frozenset(self.non_generic_tags) if self.non_generic_tags else None


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetLoadError(f"Failed to load data: {path}: {exc.strerror or exc}") from exc
    except ValueError as exc:
        raise DatasetLoadError(f"Failed to parse data: {path}: {exc}") from exc


def read_records(path: Path | str, show_progress: bool = False) -> List[ImageRecord]:
    """Parse a JSON list of records, skipping entries that are not objects."""

    payload = _read_json(Path(path))
    if not isinstance(payload, list):
        raise DatasetLoadError(f"Expected a list of records in {path}, got {type(payload).__name__}")

    records: List[ImageRecord] = []
    skipped = 0
    for item in tqdm(payload, desc="Loading records", unit="rec", disable=not show_progress):
        if not isinstance(item, dict):
            skipped += 1
            continue
        records.append(ImageRecord.from_dict(item))
    if skipped:
        logger.warning(f"Skipped {skipped} malformed entries in {path}")
    return records


def read_tag_list(path: Path | str) -> List[str]:
    """Read a JSON list of tags, returning an empty list when it is missing or malformed."""

    target = Path(path)
    if not target.exists():
        logger.warning(f"Tag whitelist not found at {target}; general tags stay unfiltered")
        return []
    try:
        payload = _read_json(target)
    except DatasetLoadError as exc:
        logger.warning(f"Ignoring tag whitelist: {exc}")
        return []
    if not isinstance(payload, list):
        logger.warning(f"Ignoring tag whitelist at {target}: expected a JSON list")
        return []
    return [str(tag) for tag in payload if isinstance(tag, str)]


class DatasetLoader:
    """Resolve dataset names to files and load them for the relevance engine."""

    def __init__(self, settings: Optional[DatasetSettings] = None) -> None:
        self.settings = settings or DatasetSettings()

    def load(self, dataset: str = "default") -> LoadedDataset:
        """
        Load the records of ``dataset`` together with the non-generic tag whitelist.

        External calls:
        - core/models/domain.py::ImageRecord.from_dict - normalizes each raw record.
        """

        records_path = self.settings.records_path(dataset)
        try:
            records = read_records(records_path, show_progress=self.settings.show_progress)
        except DatasetLoadError as exc:
            logger.exception(f"Error loading dataset {dataset!r}")
            return LoadedDataset(dataset="default", error=str(exc))

        non_generic_tags = read_tag_list(self.settings.non_generic_tags_path)
        logger.info(
            f"Loaded dataset {dataset!r}: {len(records)} records, {len(non_generic_tags)} non-generic tags"
        )
        return LoadedDataset(records=records, non_generic_tags=non_generic_tags, dataset=dataset)
