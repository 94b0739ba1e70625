#!/usr/bin/env python3

"""
Runtime configuration for metar_minima.

Settings come from environment variables; limits come from a JSON file.
"""

import os
import json
import logging
from pathlib import Path
from typing import List, Union

from metar_minima.minima.models import Limit

logger = logging.getLogger(__name__)

# Logging
LOG_LEVEL = os.getenv("METAR_MINIMA_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv(
    "METAR_MINIMA_LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Station selected when none is given
DEFAULT_STATION = os.getenv("METAR_MINIMA_STATION", "EHAM").upper()

# Number of violations listed as "recent"
RECENT_VIOLATIONS = int(os.getenv("METAR_MINIMA_RECENT_COUNT", "10"))


def load_limits(path: Union[str, Path]) -> List[Limit]:
    """
    Load limit definitions from a JSON file.

    The file holds either a list of limit objects or an object with a
    ``limits`` list. Duplicate ids are logged, not rejected.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the JSON is invalid or a limit is malformed
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('limits', [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of limits in {path}")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Limit #{index + 1} in {path} is not an object: {item!r}")
    limits = [Limit.from_dict(item) for item in data]

    seen = set()
    for limit in limits:
        if limit.id in seen:
            logger.warning("Duplicate limit id %r in %s", limit.id, path)
        seen.add(limit.id)

    logger.info("Loaded %d limits from %s", len(limits), path)
    return limits


def save_limits(limits: List[Limit], path: Union[str, Path]) -> None:
    """Write limit definitions as a JSON list."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([limit.to_dict() for limit in limits], f, indent=2, ensure_ascii=False)
