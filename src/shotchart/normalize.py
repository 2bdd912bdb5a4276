"""
Coordinate normalization.

Raw shot locations come in three season-dependent encodings. Every rule
here lands in the same canonical frame: feet, x across the court with 0 at
center, y up the court with 0 at the baseline (see geometry.py).

- 2020-2022: an affine-scaled capture system with a known distortion,
  corrected by a fixed calibration map.
- 2016-2017: coarse-grained coordinates that form a visible grid on the
  chart. Gaussian jitter is added to smear the grid out. This is a visual
  smoothing step only and makes normalization non-deterministic unless
  the random source is seeded.
- Everything else: plain unit conversion.
"""

import math
from typing import Any, Optional, Tuple
import numpy as np

from . import config
from .errors import MalformedRecord
from .models import NormalizedShot, RawShotRecord
from .zones import ZoneClassifier, default_classifier

MADE_VALUES = ("True", "true", "1")

AFFINE_SEASONS = range(2020, 2023)
JITTER_SEASONS = (2016, 2017)


def to_feet(value: float) -> float:
    """Raw values above 60 in magnitude are tenths of feet."""
    return value / 10 if abs(value) > 60 else value


def parse_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise MalformedRecord(f"{field} is not numeric: {value!r}", field, value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip() if value is not None else ""
        try:
            number = float(text)
        except ValueError:
            raise MalformedRecord(f"{field} is not numeric: {value!r}", field, value)
    if not math.isfinite(number):
        raise MalformedRecord(f"{field} is not finite: {value!r}", field, value)
    return number


def parse_season(value: Any) -> int:
    number = parse_number(value, "season")
    if not number.is_integer() or not 1000 <= number <= 9999:
        raise MalformedRecord(f"season is not a 4-digit year: {value!r}", "season", value)
    return int(number)


def parse_made(value: Any) -> bool:
    if value is True:
        return True
    return isinstance(value, str) and value.strip() in MADE_VALUES


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class CoordinateNormalizer:
    """
    Converts RawShotRecords into NormalizedShots.

    Randomness for the 2016-2017 jitter comes from a numpy Generator.
    Pass `rng` to share one, or `seed` for a reproducible run; with
    neither, config.SEED is used (unset means fresh OS entropy).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        jitter_std: Optional[float] = None,
        origin_at_rim: Optional[bool] = None,
        classify_missing_zones: Optional[bool] = None,
        classifier: Optional[ZoneClassifier] = None,
    ):
        if rng is None:
            rng = np.random.default_rng(config.SEED if seed is None else seed)
        self.rng = rng
        self.jitter_std = config.JITTER_STD if jitter_std is None else jitter_std
        self.origin_at_rim = config.ORIGIN_AT_RIM if origin_at_rim is None else origin_at_rim
        self.classify_missing_zones = (
            config.CLASSIFY_MISSING_ZONES
            if classify_missing_zones is None
            else classify_missing_zones
        )
        self.classifier = classifier or default_classifier()

    def gaussian(self) -> float:
        """
        One N(0, jitter_std) sample via Box-Muller.
        Uniform draws of exactly 0 are redrawn so log() stays finite.
        """
        u = 0.0
        while u == 0.0:
            u = float(self.rng.random())
        v = 0.0
        while v == 0.0:
            v = float(self.rng.random())
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v) * self.jitter_std

    def coordinates(self, year: int, loc_x: float, loc_y: float) -> Tuple[float, float]:
        """Map raw (LOC_X, LOC_Y) for a season to canonical (x, y) feet."""
        if year in AFFINE_SEASONS:
            # Calibration already places y in the baseline frame
            x = -(config.SCALE_2020_22 * 10 * loc_x)
            y = config.HOOP_Y + config.SCALE_2020_22 * (
                config.A_2020_22 * loc_y + config.B_2020_22
            )
            return x, y

        x = to_feet(loc_x)
        y = to_feet(loc_y)
        if self.origin_at_rim:
            y += config.HOOP_Y

        if year in JITTER_SEASONS:
            x += self.gaussian()
            y += self.gaussian()
        return x, y

    def normalize(self, raw: RawShotRecord) -> NormalizedShot:
        """
        Normalize one raw record.

        Raises:
            MalformedRecord: season, coordinates or distance do not parse,
                or the transformed position is not finite.
        """
        year = parse_season(raw.season)
        loc_x = parse_number(raw.loc_x, "loc_x")
        loc_y = parse_number(raw.loc_y, "loc_y")
        distance = parse_number(raw.shot_distance, "shot_distance")

        x, y = self.coordinates(year, loc_x, loc_y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise MalformedRecord(
                f"coordinates ({loc_x}, {loc_y}) do not map to a finite position",
                "loc",
                (loc_x, loc_y),
            )

        zone = clean_text(raw.zone)
        if not zone and self.classify_missing_zones:
            zone = self.classifier.zone_of(x, y)

        return NormalizedShot(
            season=str(year),
            x=x,
            y=y,
            made=parse_made(raw.shot_made),
            team=clean_text(raw.team),
            player=clean_text(raw.player),
            position=clean_text(raw.position),
            zone=zone,
            shot_type=clean_text(raw.shot_type),
            shot_distance=distance,
            loc_x=loc_x,
            loc_y=loc_y,
        )

    __call__ = normalize


def invert_2020_22(x: float, y: float) -> Tuple[float, float]:
    """Recover raw (LOC_X, LOC_Y) from a 2020-2022 canonical position."""
    loc_x = -x / (config.SCALE_2020_22 * 10)
    loc_y = ((y - config.HOOP_Y) / config.SCALE_2020_22 - config.B_2020_22) / config.A_2020_22
    return loc_x, loc_y


def normalize(raw: RawShotRecord, normalizer: Optional[CoordinateNormalizer] = None) -> NormalizedShot:
    return (normalizer or CoordinateNormalizer()).normalize(raw)
