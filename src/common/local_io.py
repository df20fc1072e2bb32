"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_legacy_items(path: str | Path) -> list[dict[str, Any]]:
    """
    Load legacy nutrition items from a JSON array on disk.

    Args:
        path: Path to the JSON file (e.g., "data/nutrition-info.json")

    Returns:
        List of raw item dicts, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If the top-level value is not an array of objects
    """
    filepath = Path(path)
    with filepath.open(encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {filepath}, got {type(data).__name__}")

    items = [item for item in data if isinstance(item, dict)]
    if len(items) != len(data):
        logger.warning("Ignored %d non-object entries in %s", len(data) - len(items), filepath)

    logger.info("Loaded %d items from %s", len(items), filepath)
    return items
