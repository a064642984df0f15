"""Serve the blank handbook template as base64.

Successful reads are cached for the life of the process. The file's
existence is re-checked on every call so a removed template is reported
as missing even after it was cached.
"""

import base64
import logging
from pathlib import Path
from typing import Dict, Optional

import config

logger = logging.getLogger(__name__)

_cache: Dict[str, str] = {}


def load_template_base64(path: Optional[Path] = None) -> Optional[str]:
    path = Path(path or config.HANDBOOK_TEMPLATE_PATH)
    if not path.exists():
        logger.warning("Handbook template not found: %s", path)
        return None

    key = str(path.resolve())
    cached = _cache.get(key)
    if cached:
        logger.debug("Using cached template %s", path)
        return cached

    logger.info("Loading template from %s", path)
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    _cache[key] = encoded
    logger.info("Template loaded: %.2f KB", len(encoded) / 1024)
    return encoded


def clear_template_cache() -> None:
    _cache.clear()
