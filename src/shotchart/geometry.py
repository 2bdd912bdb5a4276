"""
Fixed court measurements, in feet, for one NBA half court.

Canonical frame: x runs sideline to sideline (-25..25, 0 = center),
y runs from the baseline (0) toward half court (47). The rim sits at
(0, HOOP_Y).
"""

import math
from typing import Tuple
import numpy as np

from .config import HOOP_Y

COURT_HALF_WIDTH = 25.0
COURT_LENGTH = 47.0

RIM_RADIUS = 0.75
RESTRICTED_RADIUS = 5.0

PAINT_HALF_WIDTH = 8.0
PAINT_LENGTH = 19.0
FREE_THROW_RADIUS = 6.0

THREE_RADIUS = 23.75
CORNER_X = 22.0

# Where the arc meets the straight corner lines
BREAK_Y = HOOP_Y + math.sqrt(THREE_RADIUS ** 2 - CORNER_X ** 2)

# Arc angular bounds, measured from +x around the rim
ARC_THETA = math.acos(CORNER_X / THREE_RADIUS)
ARC_LEFT_ANGLE = math.pi - ARC_THETA
ARC_RIGHT_ANGLE = ARC_THETA

ARC_SAMPLES = 160


def distance_to_rim(x: float, y: float) -> float:
    return math.hypot(x, y - HOOP_Y)


def arc_points(samples: int = ARC_SAMPLES, reverse: bool = False) -> np.ndarray:
    """
    Sample the three-point arc between the two break points.
    Returns an (samples + 1, 2) array running from the negative-x break
    to the positive-x break (or the other way with reverse=True).
    """
    t = np.linspace(0.0, 1.0, samples + 1)
    angles = ARC_LEFT_ANGLE + (ARC_RIGHT_ANGLE - ARC_LEFT_ANGLE) * t
    if reverse:
        angles = angles[::-1]
    # cos(pi - theta) is negative, so left-angle samples sit at negative x
    xs = THREE_RADIUS * np.cos(angles)
    ys = HOOP_Y + THREE_RADIUS * np.sin(angles)
    return np.column_stack([xs, ys])


def circle_points(cx: float, cy: float, r: float, samples: int = 64) -> np.ndarray:
    angles = np.linspace(0.0, 2.0 * math.pi, samples, endpoint=False)
    return np.column_stack([cx + r * np.cos(angles), cy + r * np.sin(angles)])


def rotate_display(x: float, y: float) -> Tuple[float, float]:
    """
    Apply the chart's 180 degree rotation about the court center.
    The rotation is its own inverse, so this maps both ways.
    """
    return -x, COURT_LENGTH - y
