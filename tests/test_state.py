import pytest

from shotchart import config
from shotchart.models import ALL, FilterState
from shotchart.state import (
    AdvanceSeason,
    Playback,
    ResetFilters,
    SetPlayers,
    SetPositions,
    SetSeason,
    SetShotResult,
    SetShotTypes,
    SetTeams,
    SetZones,
    TogglePlayer,
    TogglePosition,
    ToggleTeam,
    ToggleZone,
    reduce,
    season_order,
)


def test_defaults_are_unconstrained():
    state = FilterState()
    for dim in ("season", "team", "player", "position", "zone", "made", "shot_type"):
        assert not state.is_constrained(dim)


def test_reduce_does_not_mutate():
    state = FilterState()
    new = reduce(state, SetTeams(["A", "B"]))

    assert state.teams == frozenset()
    assert new.teams == frozenset({"A", "B"})
    assert new.is_constrained("team")


def test_set_season_accepts_known_years_and_all():
    state = reduce(FilterState(), SetSeason("2016"))
    assert state.season == "2016"
    assert reduce(state, SetSeason(2018)).season == "2018"
    assert reduce(state, SetSeason(ALL)).season == ALL


def test_set_season_rejects_unknown_year():
    with pytest.raises(ValueError):
        reduce(FilterState(), SetSeason("1950"))


def test_toggles_add_and_remove():
    state = FilterState()
    state = reduce(state, ToggleZone("Mid-Range"))
    state = reduce(state, ToggleZone("Restricted Area"))
    state = reduce(state, ToggleZone("Mid-Range"))
    assert state.zones == frozenset({"Restricted Area"})

    state = reduce(state, ToggleTeam("A"))
    state = reduce(state, TogglePlayer("X"))
    assert state.teams == frozenset({"A"})
    assert state.players == frozenset({"X"})


def test_set_commands():
    state = reduce(FilterState(), SetPlayers(["X"]))
    state = reduce(state, SetZones(["Mid-Range"]))
    state = reduce(state, SetShotTypes(["3PT Field Goal"]))
    assert state.players == frozenset({"X"})
    assert state.zones == frozenset({"Mid-Range"})
    assert state.shot_types == frozenset({"3PT Field Goal"})


def test_positions_all_clears_selection():
    state = reduce(FilterState(), SetPositions(["g", "F"]))
    assert state.positions == frozenset({"G", "F"})

    assert reduce(state, TogglePosition("all")).positions == frozenset()
    assert reduce(state, SetPositions(["all", "C"])).positions == frozenset()
    assert reduce(state, TogglePosition("G")).positions == frozenset({"F"})


def test_shot_result_validation():
    assert reduce(FilterState(), SetShotResult("made")).shot_result == "made"
    with pytest.raises(ValueError):
        reduce(FilterState(), SetShotResult("blocked"))


@pytest.mark.parametrize("result", ["Made", "MISSED", "", "blocked"])
def test_filter_state_rejects_unknown_shot_result(result):
    with pytest.raises(ValueError, match="shot result"):
        FilterState(shot_result=result)


def test_reset_restores_defaults():
    state = FilterState(season="2016", teams=frozenset({"A"}), shot_result="missed")
    assert reduce(state, ResetFilters()) == FilterState()


def test_unknown_command():
    with pytest.raises(ValueError):
        reduce(FilterState(), object())


def test_advance_season_walks_the_order():
    seasons = ["2004", "2005"]
    state = FilterState()
    state = reduce(state, AdvanceSeason(), seasons)
    assert state.season == "2004"
    state = reduce(state, AdvanceSeason(), seasons)
    assert state.season == "2005"
    assert reduce(state, AdvanceSeason(), seasons).season == "2005"


def test_playback_runs_every_season_then_stops():
    playback = Playback(speed_ms=250)
    state = playback.start(FilterState())
    assert playback.playing
    assert playback.interval_s == pytest.approx(0.25)

    visited = []
    while True:
        nxt = playback.tick(state)
        if nxt is None:
            break
        state = nxt
        visited.append(state.season)

    assert visited == config.SEASONS
    assert season_order()[1:] == config.SEASONS
    assert not playback.playing


def test_playback_rewinds_from_last_season():
    playback = Playback(seasons=["2004", "2005"])
    state = playback.start(FilterState(season="2005"))
    assert state.season == ALL
    assert playback.tick(state).season == "2004"


def test_stopped_playback_does_not_tick():
    playback = Playback()
    playback.start(FilterState())
    playback.stop()
    assert playback.tick(FilterState()) is None


def test_playback_speed_change():
    playback = Playback(speed_ms=1000)
    assert playback.set_speed(500) is False
    playback.start(FilterState())
    assert playback.set_speed(2000) is True
    assert playback.interval_s == 2.0
    with pytest.raises(ValueError):
        playback.set_speed(0)


def test_playback_speed_is_validated_at_construction(monkeypatch):
    with pytest.raises(ValueError):
        Playback(speed_ms=0)
    with pytest.raises(ValueError):
        Playback(speed_ms=-250)

    monkeypatch.setattr(config, "PLAY_SPEED_MS", 750)
    assert Playback().speed_ms == 750
    assert not Playback().playing
