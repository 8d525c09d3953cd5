"""Loader for the bundled cleaned-export dataset."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from gvp.normalization.normalizer import normalize_records
from gvp.normalization.schema import NormalizedRecord

LOGGER = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when the static dataset cannot be read or is not a JSON array."""


def read_static_rows(path: Path | str) -> List[Dict[str, Any]]:
    """Read raw rows from a JSON array file.

    Raises:
        DatasetLoadError: If the file is missing, unreadable, not valid JSON, or
            not a top-level array.
    """

    dataset_path = Path(path)
    try:
        with dataset_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise DatasetLoadError(f"Static dataset not found: {dataset_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Unable to read static dataset {dataset_path}: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        raise DatasetLoadError(f"Static dataset {dataset_path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise DatasetLoadError(
            f"Static dataset {dataset_path} must contain a JSON array, got {type(payload).__name__}"
        )
    return payload


def load_static_dataset(path: Path | str) -> List[NormalizedRecord]:
    """Read and normalize every row of the cleaned export at ``path``."""

    rows = read_static_rows(path)
    records = normalize_records(rows)
    LOGGER.info("Loaded %d static survey records from %s", len(records), path)
    return records


__all__ = ["DatasetLoadError", "load_static_dataset", "read_static_rows"]
