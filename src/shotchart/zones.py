"""
Shot zone classification.

Maps a canonical (x, y) court position in feet to one of the six basic
shot zones, and exposes each zone's outline for click-to-filter hit
regions. The six zones partition the half court: every in-bounds point
lands in exactly one of them.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import numpy as np

from .geometry import (
    BREAK_Y,
    CORNER_X,
    COURT_HALF_WIDTH,
    COURT_LENGTH,
    PAINT_HALF_WIDTH,
    PAINT_LENGTH,
    RESTRICTED_RADIUS,
    THREE_RADIUS,
    arc_points,
    circle_points,
    distance_to_rim,
    rotate_display,
)
from .config import HOOP_Y
from .models import NormalizedShot

logger = logging.getLogger(__name__)

RESTRICTED_AREA = "Restricted Area"
PAINT = "In The Paint (Non-RA)"
MID_RANGE = "Mid-Range"
LEFT_CORNER_3 = "Left Corner 3"
RIGHT_CORNER_3 = "Right Corner 3"
ABOVE_BREAK_3 = "Above the Break 3"

ZONES: Tuple[str, ...] = (
    RESTRICTED_AREA,
    PAINT,
    MID_RANGE,
    LEFT_CORNER_3,
    RIGHT_CORNER_3,
    ABOVE_BREAK_3,
)


def _point_in_polygon(polygon: np.ndarray, x: float, y: float) -> bool:
    # Even-odd ray cast toward +x over every edge at once
    x1, y1 = polygon[:, 0], polygon[:, 1]
    x2, y2 = np.roll(x1, -1), np.roll(y1, -1)
    crosses = (y1 > y) != (y2 > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
    return bool(np.count_nonzero(crosses & (x < x_cross)) % 2)


@dataclass(eq=False)
class ZoneRegion:
    """
    Geometric region of one zone.

    outlines: closed polygons, each an (N, 2) array of (x, y) vertices in feet.
    holes: polygons cut out of the outlines.
    """
    zone: str
    outlines: List[np.ndarray]
    holes: List[np.ndarray] = field(default_factory=list)

    def contains(self, x: float, y: float) -> bool:
        """Point-in-polygon over the outlines, minus the holes."""
        return (any(_point_in_polygon(p, x, y) for p in self.outlines)
                and not any(_point_in_polygon(h, x, y) for h in self.holes))

    def bounds(self) -> Tuple[float, float, float, float]:
        """(x_min, y_min, x_max, y_max) over all outlines."""
        pts = np.vstack(self.outlines)
        x_min, y_min = pts.min(axis=0)
        x_max, y_max = pts.max(axis=0)
        return float(x_min), float(y_min), float(x_max), float(y_max)


def _rect(x0: float, y0: float, x1: float, y1: float) -> np.ndarray:
    return np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]], dtype=float)


class ZoneClassifier:
    """
    Classifies canonical court positions into the six basic shot zones.

    Test order: restricted disk, paint rectangle, corner rectangles,
    beyond the arc, and Mid-Range for everything left inside the arc.
    """

    def zone_of(self, x: float, y: float) -> str:
        if distance_to_rim(x, y) <= RESTRICTED_RADIUS:
            return RESTRICTED_AREA

        if abs(x) <= PAINT_HALF_WIDTH and y <= PAINT_LENGTH:
            return PAINT

        # Corner rectangles run from the baseline up to the arc break
        if abs(x) >= CORNER_X and y <= BREAK_Y:
            return LEFT_CORNER_3 if x < 0 else RIGHT_CORNER_3

        if distance_to_rim(x, y) >= THREE_RADIUS:
            return ABOVE_BREAK_3

        return MID_RANGE

    def zone_at_display(self, x: float, y: float) -> str:
        """Classify a point given in the rotated display frame (still in feet)."""
        cx, cy = rotate_display(x, y)
        return self.zone_of(cx, cy)

    def boundary_of(self, zone: str) -> ZoneRegion:
        if zone == RESTRICTED_AREA:
            return ZoneRegion(zone, [circle_points(0.0, HOOP_Y, RESTRICTED_RADIUS)])

        paint_rect = _rect(-PAINT_HALF_WIDTH, 0.0, PAINT_HALF_WIDTH, PAINT_LENGTH)
        if zone == PAINT:
            return ZoneRegion(
                zone,
                [paint_rect],
                holes=[circle_points(0.0, HOOP_Y, RESTRICTED_RADIUS)],
            )

        if zone == MID_RANGE:
            outline = np.vstack([
                [[-CORNER_X, 0.0]],
                arc_points(),
                [[CORNER_X, 0.0]],
            ])
            return ZoneRegion(zone, [outline], holes=[paint_rect])

        if zone == LEFT_CORNER_3:
            return ZoneRegion(zone, [_rect(-COURT_HALF_WIDTH, 0.0, -CORNER_X, BREAK_Y)])

        if zone == RIGHT_CORNER_3:
            return ZoneRegion(zone, [_rect(CORNER_X, 0.0, COURT_HALF_WIDTH, BREAK_Y)])

        if zone == ABOVE_BREAK_3:
            outline = np.vstack([
                [[-COURT_HALF_WIDTH, BREAK_Y]],
                arc_points(),
                [[COURT_HALF_WIDTH, BREAK_Y]],
                [[COURT_HALF_WIDTH, COURT_LENGTH]],
                [[-COURT_HALF_WIDTH, COURT_LENGTH]],
            ])
            return ZoneRegion(zone, [outline])

        raise KeyError(f"Unknown zone: {zone!r}")

    def hit_regions(self) -> Dict[str, ZoneRegion]:
        """Zone name -> region, for building click-to-filter targets."""
        return {zone: self.boundary_of(zone) for zone in ZONES}

    def label_mismatches(
        self, shots: Iterable[NormalizedShot]
    ) -> List[Tuple[NormalizedShot, str]]:
        """
        Cross-check recorded zone labels against geometry.

        Returns (shot, geometric_zone) for every shot carrying a canonical
        label that disagrees with its position. Shots with empty or
        non-canonical labels (e.g. "Backcourt") are not checked.
        """
        mismatches = []
        for shot in shots:
            if shot.zone not in ZONES:
                continue
            expected = self.zone_of(shot.x, shot.y)
            if expected != shot.zone:
                mismatches.append((shot, expected))
        if mismatches:
            logger.warning(
                "%d shots carry a zone label that disagrees with their position",
                len(mismatches),
            )
        return mismatches


_default: Optional[ZoneClassifier] = None


def default_classifier() -> ZoneClassifier:
    global _default
    if _default is None:
        _default = ZoneClassifier()
    return _default


def zone_of(x: float, y: float) -> str:
    return default_classifier().zone_of(x, y)


def boundary_of(zone: str) -> ZoneRegion:
    return default_classifier().boundary_of(zone)
