from __future__ import annotations

import logging
from typing import Optional

from config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    给脚本/CLI 用；核心模块只拿 logger，不自己挂 handler
    """
    lvl = (level or getattr(settings, "LOG_LEVEL", "INFO") or "INFO").strip().upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=_FORMAT)
