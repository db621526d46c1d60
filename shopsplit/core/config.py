"""Configuration management for shopsplit."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env file
load_dotenv(PROJECT_ROOT / ".env")

DATA_DIR = Path(os.getenv("SHOPSPLIT_DATA_DIR", str(PROJECT_ROOT / "data")))
LOCAL_DIR = DATA_DIR / "local"
DB_PATH = LOCAL_DIR / "shopsplit.db"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class AllocatorConfig:
    """Tunables for the group allocation engine.

    The scorer weights only need to keep their ordering: the per-group
    satisfied bonus must dominate overage tuning, and the shortfall slope
    must be much steeper than the overage slope.
    """

    MAX_ITERATIONS: int = _env_int("ALLOCATOR_MAX_ITERATIONS", 200)
    OVER_TARGET_PENALTY: float = _env_float("ALLOCATOR_OVER_TARGET_PENALTY", 0.1)

    SATISFIED_BONUS: float = _env_float("ALLOCATOR_SATISFIED_BONUS", 1000.0)
    SATISFIED_COUNT_BONUS: float = _env_float("ALLOCATOR_SATISFIED_COUNT_BONUS", 10000.0)
    OVERAGE_SLOPE: float = _env_float("ALLOCATOR_OVERAGE_SLOPE", 10.0)
    OVERAGE_CAP: float = _env_float("ALLOCATOR_OVERAGE_CAP", 500.0)
    SHORTFALL_SLOPE: float = _env_float("ALLOCATOR_SHORTFALL_SLOPE", 100.0)


def ensure_directories() -> None:
    """Create required data directories if they don't exist."""
    LOCAL_DIR.mkdir(parents=True, exist_ok=True)
