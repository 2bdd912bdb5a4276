from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

ALL = "all"
MADE = "made"
MISSED = "missed"
SHOT_RESULTS = (ALL, MADE, MISSED)

# Column names, first present wins
SEASON_COLUMNS = ("SEASON_1",)
LOC_X_COLUMNS = ("LOC_X",)
LOC_Y_COLUMNS = ("LOC_Y",)
DISTANCE_COLUMNS = ("SHOT_DISTANCE",)
MADE_COLUMNS = ("SHOT_MADE",)
TEAM_COLUMNS = ("TEAM_NAME",)
PLAYER_COLUMNS = ("PLAYER_NAME",)
POSITION_COLUMNS = ("POSITION_GROUP", "POSITION")
ZONE_COLUMNS = ("BASIC_ZONE", "SHOT_ZONE_BASIC")
SHOT_TYPE_COLUMNS = ("SHOT_TYPE",)

REQUIRED_COLUMN_GROUPS = (
    SEASON_COLUMNS,
    LOC_X_COLUMNS,
    LOC_Y_COLUMNS,
    DISTANCE_COLUMNS,
    MADE_COLUMNS,
    TEAM_COLUMNS,
    PLAYER_COLUMNS,
    POSITION_COLUMNS,
    SHOT_TYPE_COLUMNS,
)


def _first(row: Mapping[str, Any], columns: Sequence[str]) -> Any:
    # Mirrors `a || b || ''`: an empty value falls through to the next column
    for col in columns:
        value = row.get(col)
        if value is not None and value != "":
            return value
    return ""


@dataclass(frozen=True)
class RawShotRecord:
    season: Any
    loc_x: Any
    loc_y: Any
    shot_distance: Any
    shot_made: Any
    team: Any = ""
    player: Any = ""
    position: Any = ""
    zone: Any = ""
    shot_type: Any = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RawShotRecord":
        return cls(
            season=_first(row, SEASON_COLUMNS),
            loc_x=_first(row, LOC_X_COLUMNS),
            loc_y=_first(row, LOC_Y_COLUMNS),
            shot_distance=_first(row, DISTANCE_COLUMNS),
            shot_made=_first(row, MADE_COLUMNS),
            team=_first(row, TEAM_COLUMNS),
            player=_first(row, PLAYER_COLUMNS),
            position=_first(row, POSITION_COLUMNS),
            zone=_first(row, ZONE_COLUMNS),
            shot_type=_first(row, SHOT_TYPE_COLUMNS),
        )


@dataclass(frozen=True)
class NormalizedShot:
    season: str          # 4-digit year
    x: float             # feet, canonical frame
    y: float
    made: bool
    team: str
    player: str
    position: str
    zone: str
    shot_type: str       # free text, "2PT ..." / "3PT ..."
    shot_distance: float
    loc_x: float
    loc_y: float


@dataclass(frozen=True)
class FilterState:
    season: str = ALL
    teams: FrozenSet[str] = frozenset()
    players: FrozenSet[str] = frozenset()
    zones: FrozenSet[str] = frozenset()
    positions: FrozenSet[str] = frozenset()
    shot_types: FrozenSet[str] = frozenset()
    shot_result: str = ALL

    def __post_init__(self):
        if self.shot_result not in SHOT_RESULTS:
            raise ValueError(f"Unknown shot result: {self.shot_result!r}")

    def is_constrained(self, dimension: str) -> bool:
        """True when the given dimension currently narrows the subset."""
        if dimension == "season":
            return self.season != ALL
        if dimension == "made":
            return self.shot_result != ALL
        return bool(getattr(self, _STATE_FIELDS[dimension]))


# Filter dimension name -> FilterState attribute holding its selection
_STATE_FIELDS: Dict[str, str] = {
    "season": "season",
    "team": "teams",
    "player": "players",
    "position": "positions",
    "zone": "zones",
    "made": "shot_result",
    "shot_type": "shot_types",
}


@dataclass(frozen=True)
class ZoneStat:
    zone: str
    attempts: int
    makes: int
    fg_pct: float


@dataclass(frozen=True)
class ShotStats:
    attempts: int
    makes: int
    fg_pct: float
    three_attempts: int
    three_makes: int
    three_pct: float
    three_attempt_rate: float
    two_attempt_share: float
    efg_pct: Optional[float]    # None when not applicable (zone filter active)
    league_baseline: float
    fg_delta: float
    zones: Tuple[ZoneStat, ...] = field(default_factory=tuple)

    def zone(self, name: str) -> ZoneStat:
        for z in self.zones:
            if z.zone == name:
                return z
        raise KeyError(name)


@dataclass(frozen=True)
class ChartView:
    """Everything the rendering side needs for one filter state."""
    state: FilterState
    subset: Tuple[NormalizedShot, ...]
    stats: ShotStats
    options: Mapping[str, Tuple[str, ...]]
