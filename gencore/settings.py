from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

REPO_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_DIR = REPO_DIR / "data"
DEFAULT_STORAGE_KEY = "tusk_india_generation_v1"

MIN_RANGE_DAYS = 7
MAX_RANGE_DAYS = 3650
DEFAULT_RANGE_DAYS = 120
DEFAULT_MONTHLY_WINDOW = 24
DEFAULT_MAX_IMPORT_ERRORS = 12


def clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    storage_key: str = DEFAULT_STORAGE_KEY
    default_range_days: int = DEFAULT_RANGE_DAYS
    monthly_window: int = DEFAULT_MONTHLY_WINDOW
    max_import_errors: int = DEFAULT_MAX_IMPORT_ERRORS
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from ``GENCORE_*`` environment variables."""
    defaults = Settings()
    data_dir = os.getenv("GENCORE_DATA_DIR", "").strip()
    origins = [o.strip() for o in os.getenv("GENCORE_CORS_ORIGINS", "").split(",") if o.strip()]
    return Settings(
        data_dir=Path(data_dir) if data_dir else defaults.data_dir,
        storage_key=os.getenv("GENCORE_STORAGE_KEY", "").strip() or defaults.storage_key,
        default_range_days=clamp(_env_int("GENCORE_DEFAULT_RANGE_DAYS", DEFAULT_RANGE_DAYS), MIN_RANGE_DAYS, MAX_RANGE_DAYS),
        monthly_window=max(1, _env_int("GENCORE_MONTHLY_WINDOW", DEFAULT_MONTHLY_WINDOW)),
        max_import_errors=max(1, _env_int("GENCORE_MAX_IMPORT_ERRORS", DEFAULT_MAX_IMPORT_ERRORS)),
        cors_origins=origins or defaults.cors_origins,
        log_level=(os.getenv("GENCORE_LOG_LEVEL", "").strip() or defaults.log_level).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
