from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QStandardPaths

from lyrics_finder.core.lrclib_client import DEFAULT_INSTANCE

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


def get_app_data_dir() -> str:
    base = os.getenv("LYRICS_FINDER_DATA_DIR") or QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppDataLocation
    )
    os.makedirs(base, exist_ok=True)
    return base


def _timeout_from_env(raw: str | None) -> Optional[float]:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring LYRICS_FINDER_TIMEOUT=%r (not a number), using %ss", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return value if value > 0 else None  # 0 -> wait forever


@dataclass
class AppConfig:
    lrclib_instance: str = DEFAULT_INSTANCE
    user_agent: str = "lyrics-finder/0.1"
    request_timeout: Optional[float] = DEFAULT_TIMEOUT
    app_data_dir: str = ""
    debug: bool = False

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            lrclib_instance=os.getenv("LYRICS_FINDER_LRCLIB") or DEFAULT_INSTANCE,
            request_timeout=_timeout_from_env(os.getenv("LYRICS_FINDER_TIMEOUT")),
            app_data_dir=get_app_data_dir(),
            debug=os.getenv("LYRICS_FINDER_DEBUG") == "1",
        )
