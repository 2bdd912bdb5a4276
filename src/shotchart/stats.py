from typing import List, Optional, Sequence, Tuple

from .models import NormalizedShot, ShotStats, ZoneStat
from .zones import ZONES

THREE_MARKER = "3PT"
TWO_MARKER = "2PT"

Shots = Sequence[NormalizedShot]


def made_count(shots: Shots) -> int:
    return sum(1 for s in shots if s.made)


def _ratio(num: float, den: int) -> float:
    return num / den if den else 0.0


def field_goal_pct(shots: Shots) -> float:
    return _ratio(made_count(shots), len(shots))


def three_point_subset(shots: Shots) -> List[NormalizedShot]:
    # Case-sensitive substring match on the free-text shot type
    return [s for s in shots if THREE_MARKER in s.shot_type]


def two_point_subset(shots: Shots) -> List[NormalizedShot]:
    return [s for s in shots if TWO_MARKER in s.shot_type]


def three_point_pct(shots: Shots) -> float:
    return field_goal_pct(three_point_subset(shots))


def three_point_attempt_rate(shots: Shots) -> float:
    return _ratio(len(three_point_subset(shots)), len(shots))


def two_point_attempt_share(shots: Shots) -> float:
    return _ratio(len(two_point_subset(shots)), len(shots))


def effective_field_goal_pct(shots: Shots, zone_filtered: bool = False) -> Optional[float]:
    """
    eFG% = (FGM + 0.5 * 3PM) / FGA.

    Returns None ("not applicable") when a zone filter narrows the subset,
    since the shot-type mix is then fixed by the zone choice.
    """
    if zone_filtered:
        return None
    threes_made = made_count(three_point_subset(shots))
    return _ratio(made_count(shots) + 0.5 * threes_made, len(shots))


def field_goal_delta(shots: Shots, league_baseline: float) -> float:
    return field_goal_pct(shots) - league_baseline


def zone_breakdown(shots: Shots, zones: Sequence[str] = ZONES) -> Tuple[ZoneStat, ...]:
    """FG% per canonical zone. Zones without shots report 0."""
    attempts = {z: 0 for z in zones}
    makes = {z: 0 for z in zones}
    for s in shots:
        if s.zone in attempts:
            attempts[s.zone] += 1
            if s.made:
                makes[s.zone] += 1
    return tuple(
        ZoneStat(zone=z, attempts=attempts[z], makes=makes[z],
                 fg_pct=_ratio(makes[z], attempts[z]))
        for z in zones
    )


def compute(shots: Shots, league_baseline: float, zone_filtered: bool = False) -> ShotStats:
    """
    All summary statistics for one subset.
    An empty subset yields zeros everywhere (eFG% stays None under a zone filter).
    """
    threes = three_point_subset(shots)
    attempts = len(shots)
    makes = made_count(shots)
    fg = _ratio(makes, attempts)

    return ShotStats(
        attempts=attempts,
        makes=makes,
        fg_pct=fg,
        three_attempts=len(threes),
        three_makes=made_count(threes),
        three_pct=field_goal_pct(threes),
        three_attempt_rate=_ratio(len(threes), attempts),
        two_attempt_share=two_point_attempt_share(shots),
        efg_pct=effective_field_goal_pct(shots, zone_filtered=zone_filtered),
        league_baseline=league_baseline,
        fg_delta=fg - league_baseline,
        zones=zone_breakdown(shots),
    )


def format_pct(value: Optional[float]) -> str:
    """0.4567 -> '45.7%'. None renders as 'N/A'."""
    if value is None:
        return "N/A"
    return f"{value * 100:.1f}%"


def format_count(value: int) -> str:
    return f"{value:,}"
