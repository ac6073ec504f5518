"""Loading the dashboard dataset from a JSON file on disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from core.models import Dataset

logger = logging.getLogger(__name__)

DEFAULT_DATASET_PATH = Path(__file__).parent.parent / "data" / "data.json"


def dataset_path() -> Path:
    """Return the dataset file path, honouring a DATASET_PATH env var if set."""
    env = os.getenv("DATASET_PATH")
    return Path(env) if env else DEFAULT_DATASET_PATH


def load_dataset(path: Optional[Union[str, Path]] = None) -> Dataset:
    """Read and validate the dataset JSON at *path*.

    Args:
        path: File to read; defaults to ``dataset_path()``.

    Returns:
        The validated ``Dataset``.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the JSON is malformed or the wrong shape.
    """
    path = Path(path) if path else dataset_path()
    dataset = Dataset.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded dataset from %s (%d graphs, %d platforms)",
        path, len(dataset.graphs), len(dataset.platforms),
    )
    return dataset
