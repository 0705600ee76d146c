from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

DEFAULT_MAX_DEPTH = 256
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    base_url: Optional[str] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    export_dir: str = tempfile.gettempdir()
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_depth(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        return DEFAULT_MAX_DEPTH
    return depth if depth > 0 else DEFAULT_MAX_DEPTH


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``JQT_*`` environment variables."""
    env = os.environ if environ is None else environ
    return Settings(
        base_url=(env.get("JQT_BASE_URL") or "").strip() or None,
        max_depth=_parse_depth(env.get("JQT_MAX_DEPTH")),
        export_dir=(env.get("JQT_EXPORT_DIR") or "").strip() or tempfile.gettempdir(),
        log_level=(env.get("JQT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the root logger if none is configured yet."""
    name = (level or get_settings().log_level).upper()
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
