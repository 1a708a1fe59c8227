from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "ENTITYFORMS_LOG_LEVEL"
DEBUG_ENV = "ENTITYFORMS_DEBUG"


def env_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def configure_root(default_level: int = logging.WARNING) -> int:
    """Configure the CLI's root logger and return the level in effect.

    ``ENTITYFORMS_LOG_LEVEL`` (a level name such as ``INFO``) wins over
    ``ENTITYFORMS_DEBUG``; unknown level names fall back to ``default_level``.
    """
    level = default_level
    name = (os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    if name:
        candidate = logging.getLevelName(name)
        if isinstance(candidate, int):
            level = candidate
    elif env_truthy(os.getenv(DEBUG_ENV)):
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)
    return level
