# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes dataset locations, default query parameters, and logging verbosity.

import os
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, Field, field_validator

from core.models.domain import Metric


class DatasetSettings(BaseModel):
    """Settings describing where record datasets and the tag whitelist live."""

    data_dir: Path = Field(default=Path("static/data"), description="Folder containing dataset JSON files.")
    files: Dict[str, str] = Field(
        default_factory=lambda: {"default": "output.json", "gelbooru": "output_gelbooru.json"},
        description="Dataset name to records file mapping; 'default' is used for unknown names.",
    )
    non_generic_tags_file: str = Field(
        default="non_generic_tags.json",
        description="JSON list of general tags considered specific enough to aggregate.",
    )
    show_progress: bool = Field(default=False, description="Display a progress bar while parsing records.")

    def records_path(self, dataset: str) -> Path:
        """Return the records file for a dataset name, falling back to the default file."""

        filename = self.files.get(dataset) or self.files.get("default", "output.json")
        return self.data_dir / filename

    @property
    def non_generic_tags_path(self) -> Path:
        return self.data_dir / self.non_generic_tags_file


class QuerySettings(BaseModel):
    """Default parameters applied when a caller leaves a query argument unset."""

    metric: Metric = Field(default=Metric.INTERACTIONS, description="Weighting metric used when none is given.")
    top_tags_limit: int = Field(default=50, description="Maximum number of globally ranked tags.")
    min_support: int = Field(default=1, description="Minimum weight a tag needs to be ranked globally.")
    user_tags_limit: int = Field(default=20, description="Maximum number of tags ranked for one user.")
    top_users_limit: int = Field(default=50, description="Maximum number of ranked users.")
    network_limit: int = Field(default=30, description="Number of top tags feeding the global network.")
    network_min_cooccurrence: int = Field(default=2, description="Minimum edge weight kept in the global network.")
    neighbor_limit: int = Field(default=20, description="Maximum number of neighbors around a tag.")
    neighbor_min_cooccurrence: int = Field(default=1, description="Minimum weight of a tag neighbor.")
    user_neighbor_limit: int = Field(default=30, description="Maximum number of neighbors around a user.")
    fans_limit: int = Field(default=50, description="Maximum number of tags in the biggest-fans listing.")

    @field_validator("metric", mode="before")
    @classmethod
    def _parse_metric(cls, value: object) -> Metric:
        return Metric.parse(value if isinstance(value, (Metric, str)) else None)


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    default_dataset: str = Field(default="default", description="Dataset loaded when none is requested.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings, applying RELEVANCE_* environment overrides when present."""

        settings = cls()
        data_dir = os.environ.get("RELEVANCE_DATA_DIR")
        if data_dir:
            settings.dataset.data_dir = Path(data_dir)
        dataset = os.environ.get("RELEVANCE_DATASET")
        if dataset:
            settings.default_dataset = dataset
        metric = os.environ.get("RELEVANCE_METRIC")
        if metric:
            settings.query.metric = Metric.parse(metric)
        log_level = os.environ.get("RELEVANCE_LOG_LEVEL")
        if log_level:
            settings.log_level = log_level.upper()
        return settings


__all__ = ["AppSettings", "DatasetSettings", "QuerySettings"]
