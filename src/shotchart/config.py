import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


# Data source
DATA_PATH = os.getenv("SHOTCHART_DATA_PATH", "data/nba_shots_sampled.csv")

# Court geometry: rim y-coordinate in feet from the baseline
HOOP_Y = 5.25
ORIGIN_AT_RIM = _env_bool("SHOTCHART_ORIGIN_AT_RIM", False)

# Jitter for 2016-2017 seasons
JITTER_STD = _env_float("SHOTCHART_JITTER_STD", 0.2)
SEED = _env_int("SHOTCHART_SEED", None)

# 2020-2022 scaling constants
A_2020_22 = 10.021576503177235
B_2020_22 = -58.588293955235294
SCALE_2020_22 = 1.0175

# Fill empty zone labels from shot geometry
CLASSIFY_MISSING_ZONES = _env_bool("SHOTCHART_CLASSIFY_MISSING_ZONES", True)

# Playback
PLAY_SPEED_MS = _env_int("SHOTCHART_PLAY_SPEED_MS", 1000)

SEASONS: List[str] = [str(year) for year in range(2004, 2025)]


def validate_config():
    """
    Validates that configuration values are usable.
    Raises ValueError describing every problem found.
    """
    problems = []
    if JITTER_STD < 0:
        problems.append(f"SHOTCHART_JITTER_STD must be >= 0, got {JITTER_STD}")
    if PLAY_SPEED_MS is None or PLAY_SPEED_MS <= 0:
        problems.append(f"SHOTCHART_PLAY_SPEED_MS must be > 0, got {PLAY_SPEED_MS}")
    if not DATA_PATH:
        problems.append("SHOTCHART_DATA_PATH is empty")
    if problems:
        raise ValueError("Invalid configuration: " + "; ".join(problems))
