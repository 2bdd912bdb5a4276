import csv
from pathlib import Path
from typing import Dict, List

import pytest

from shotchart.models import NormalizedShot, RawShotRecord

HEADER = [
    "SEASON_1", "LOC_X", "LOC_Y", "SHOT_DISTANCE", "SHOT_MADE",
    "TEAM_NAME", "PLAYER_NAME", "POSITION_GROUP", "BASIC_ZONE", "SHOT_TYPE",
]


def make_shot(**overrides) -> NormalizedShot:
    fields = dict(
        season="2010",
        x=0.0,
        y=10.0,
        made=False,
        team="Team A",
        player="Player X",
        position="G",
        zone="Mid-Range",
        shot_type="2PT Field Goal",
        shot_distance=10.0,
        loc_x=0.0,
        loc_y=100.0,
    )
    fields.update(overrides)
    return NormalizedShot(**fields)


def make_raw(**overrides) -> RawShotRecord:
    fields = dict(
        season="2010",
        loc_x="0",
        loc_y="100",
        shot_distance="10",
        shot_made="True",
        team="Team A",
        player="Player X",
        position="G",
        zone="Mid-Range",
        shot_type="2PT Field Goal",
    )
    fields.update(overrides)
    return RawShotRecord(**fields)


def make_row(**overrides) -> Dict[str, str]:
    row = {
        "SEASON_1": "2010",
        "LOC_X": "0",
        "LOC_Y": "100",
        "SHOT_DISTANCE": "10",
        "SHOT_MADE": "True",
        "TEAM_NAME": "Team A",
        "PLAYER_NAME": "Player X",
        "POSITION_GROUP": "G",
        "BASIC_ZONE": "Mid-Range",
        "SHOT_TYPE": "2PT Field Goal",
    }
    row.update(overrides)
    return row


def write_csv(path: Path, rows: List[Dict[str, str]], header: List[str] = HEADER) -> Path:
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=header, extrasaction="ignore")
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
    return path


@pytest.fixture
def two_team_shots() -> List[NormalizedShot]:
    """Team A only has Player X, Team B only has Player Y."""
    return [
        make_shot(team="Team A", player="Player X", season="2015", made=True,
                  position="G", zone="Restricted Area", shot_type="2PT Field Goal"),
        make_shot(team="Team A", player="Player X", season="2016", made=False,
                  position="G", zone="Above the Break 3", shot_type="3PT Field Goal"),
        make_shot(team="Team B", player="Player Y", season="2015", made=True,
                  position="C", zone="Restricted Area", shot_type="2PT Field Goal"),
        make_shot(team="Team B", player="Player Y", season="2016", made=False,
                  position="C", zone="Mid-Range", shot_type="2PT Field Goal"),
    ]
