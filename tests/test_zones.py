import logging

import numpy as np
import pytest

from shotchart import geometry
from shotchart.zones import (
    ABOVE_BREAK_3,
    LEFT_CORNER_3,
    MID_RANGE,
    PAINT,
    RESTRICTED_AREA,
    RIGHT_CORNER_3,
    ZONES,
    ZoneClassifier,
    boundary_of,
    zone_of,
)

from conftest import make_shot


# Sampled arcs are chords that sit just inside the true circles
_BOUNDARY_TOL = 0.05


def _near_boundary(x: float, y: float) -> bool:
    zone = zone_of(x, y)
    return any(
        zone_of(x + dx, y + dy) != zone
        for dx in (-_BOUNDARY_TOL, 0.0, _BOUNDARY_TOL)
        for dy in (-_BOUNDARY_TOL, 0.0, _BOUNDARY_TOL)
    )


@pytest.mark.parametrize("x, y, zone", [
    (0.0, geometry.HOOP_Y, RESTRICTED_AREA),
    (3.0, 8.0, RESTRICTED_AREA),
    (0.0, 15.0, PAINT),
    (7.9, 18.9, PAINT),
    (-7.5, 1.0, PAINT),
    (0.0, 25.0, MID_RANGE),
    (15.0, 10.0, MID_RANGE),
    (21.9, 14.0, MID_RANGE),
    (-23.0, 5.0, LEFT_CORNER_3),
    (-24.9, 14.0, LEFT_CORNER_3),
    (23.0, 5.0, RIGHT_CORNER_3),
    (23.0, 20.0, ABOVE_BREAK_3),
    (0.0, 29.5, ABOVE_BREAK_3),
    (0.0, 46.0, ABOVE_BREAK_3),
])
def test_known_points(x, y, zone):
    assert zone_of(x, y) == zone


def test_break_point_geometry():
    assert geometry.BREAK_Y == pytest.approx(geometry.HOOP_Y + np.sqrt(23.75 ** 2 - 22 ** 2))
    assert geometry.distance_to_rim(geometry.CORNER_X, geometry.BREAK_Y) == pytest.approx(23.75)
    arc = geometry.arc_points()
    assert list(arc[0]) == pytest.approx([-geometry.CORNER_X, geometry.BREAK_Y])
    assert list(arc[-1]) == pytest.approx([geometry.CORNER_X, geometry.BREAK_Y])


def test_every_in_bounds_point_gets_exactly_one_zone():
    for x in np.arange(-25.0, 25.01, 0.5):
        for y in np.arange(0.0, 47.01, 0.5):
            assert zone_of(float(x), float(y)) in ZONES


def test_hit_regions_partition_the_court_like_the_classifier():
    regions = ZoneClassifier().hit_regions()
    checked = 0
    # Off-lattice steps so the grid does not sit on the round-number edges
    for x in np.arange(-24.93, 24.95, 0.37):
        for y in np.arange(0.07, 46.95, 0.41):
            x, y = float(x), float(y)
            if _near_boundary(x, y):
                continue
            hits = [name for name, region in regions.items() if region.contains(x, y)]
            assert hits == [zone_of(x, y)], (x, y)
            checked += 1
    assert checked > 10000


@pytest.mark.parametrize("x, y, zone", [
    (0.5, 5.5, RESTRICTED_AREA),
    (6.0, 15.0, PAINT),
    (15.0, 10.0, MID_RANGE),
    (0.0, 25.0, MID_RANGE),
    (-24.0, 5.0, LEFT_CORNER_3),
    (24.0, 5.0, RIGHT_CORNER_3),
    (0.0, 35.0, ABOVE_BREAK_3),
    (20.0, 30.0, ABOVE_BREAK_3),
])
def test_outlines_agree_with_classifier(x, y, zone):
    regions = ZoneClassifier().hit_regions()
    assert regions[zone].contains(x, y)
    for other, region in regions.items():
        if other != zone:
            assert not region.contains(x, y), other


def test_corner_bounds():
    assert boundary_of(LEFT_CORNER_3).bounds() == pytest.approx(
        (-25.0, 0.0, -22.0, geometry.BREAK_Y))
    assert boundary_of(RIGHT_CORNER_3).bounds() == pytest.approx(
        (22.0, 0.0, 25.0, geometry.BREAK_Y))


def test_unknown_zone_boundary():
    with pytest.raises(KeyError):
        boundary_of("Backcourt")


def test_display_clicks_undo_rotation():
    clf = ZoneClassifier()
    assert clf.zone_at_display(0.0, geometry.COURT_LENGTH - geometry.HOOP_Y) == RESTRICTED_AREA
    # Display right side is canonical negative x
    assert clf.zone_at_display(23.0, 42.0) == LEFT_CORNER_3
    assert geometry.rotate_display(*geometry.rotate_display(3.0, 4.0)) == (3.0, 4.0)


def test_label_mismatches(caplog):
    shots = [
        make_shot(x=0.0, y=5.0, zone=RESTRICTED_AREA),
        make_shot(x=0.0, y=35.0, zone=MID_RANGE),
        make_shot(x=0.0, y=35.0, zone="Backcourt"),
        make_shot(x=0.0, y=35.0, zone=""),
    ]
    with caplog.at_level(logging.WARNING, logger="shotchart.zones"):
        found = ZoneClassifier().label_mismatches(shots)

    assert [(s.zone, z) for s, z in found] == [(MID_RANGE, ABOVE_BREAK_3)]
    assert "1 shots" in caplog.text
