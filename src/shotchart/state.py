"""
Filter state transitions.

UI events arrive as typed commands and a pure reducer turns
(FilterState, command) into the next FilterState. Playback drives the
season through the same reducer, one step per timer tick; scheduling the
ticks is left to the caller.
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Optional, Sequence

from . import config
from .models import ALL, SHOT_RESULTS, FilterState


@dataclass(frozen=True)
class SetSeason:
    season: str


@dataclass(frozen=True)
class AdvanceSeason:
    pass


@dataclass(frozen=True)
class SetTeams:
    teams: Iterable[str]


@dataclass(frozen=True)
class ToggleTeam:
    team: str


@dataclass(frozen=True)
class SetPlayers:
    players: Iterable[str]


@dataclass(frozen=True)
class TogglePlayer:
    player: str


@dataclass(frozen=True)
class SetZones:
    zones: Iterable[str]


@dataclass(frozen=True)
class ToggleZone:
    zone: str


@dataclass(frozen=True)
class SetPositions:
    positions: Iterable[str]


@dataclass(frozen=True)
class TogglePosition:
    position: str


@dataclass(frozen=True)
class SetShotTypes:
    shot_types: Iterable[str]


@dataclass(frozen=True)
class SetShotResult:
    result: str


@dataclass(frozen=True)
class ResetFilters:
    pass


def _toggle(values: FrozenSet[str], value: str) -> FrozenSet[str]:
    return values - {value} if value in values else values | {value}


def _positions(values: Iterable[str]) -> FrozenSet[str]:
    # The "all" checkbox clears every position pick
    codes = frozenset(v.upper() for v in values)
    if ALL.upper() in codes:
        return frozenset()
    return codes


def season_order(seasons: Optional[Sequence[str]] = None) -> List[str]:
    """Playback order: "all" followed by every season."""
    return [ALL] + list(seasons or config.SEASONS)


def reduce(state: FilterState, command, seasons: Optional[Sequence[str]] = None) -> FilterState:
    """
    Apply one command and return the new state. `state` is never modified.

    Raises:
        ValueError: unknown season, shot result or command.
    """
    seasons = list(seasons or config.SEASONS)

    if isinstance(command, SetSeason):
        season = str(command.season)
        if season != ALL and season not in seasons:
            raise ValueError(f"Unknown season: {command.season!r}")
        return replace(state, season=season)

    if isinstance(command, AdvanceSeason):
        order = season_order(seasons)
        if state.season not in order:
            return replace(state, season=seasons[0])
        idx = order.index(state.season)
        if idx + 1 >= len(order):
            return state
        return replace(state, season=order[idx + 1])

    if isinstance(command, SetTeams):
        return replace(state, teams=frozenset(command.teams))
    if isinstance(command, ToggleTeam):
        return replace(state, teams=_toggle(state.teams, command.team))

    if isinstance(command, SetPlayers):
        return replace(state, players=frozenset(command.players))
    if isinstance(command, TogglePlayer):
        return replace(state, players=_toggle(state.players, command.player))

    if isinstance(command, SetZones):
        return replace(state, zones=frozenset(command.zones))
    if isinstance(command, ToggleZone):
        return replace(state, zones=_toggle(state.zones, command.zone))

    if isinstance(command, SetPositions):
        return replace(state, positions=_positions(command.positions))
    if isinstance(command, TogglePosition):
        if command.position.upper() == ALL.upper():
            return replace(state, positions=frozenset())
        return replace(state, positions=_toggle(state.positions, command.position.upper()))

    if isinstance(command, SetShotTypes):
        return replace(state, shot_types=frozenset(command.shot_types))

    if isinstance(command, SetShotResult):
        if command.result not in SHOT_RESULTS:
            raise ValueError(f"Unknown shot result: {command.result!r}")
        return replace(state, shot_result=command.result)

    if isinstance(command, ResetFilters):
        return FilterState()

    raise ValueError(f"Unknown command: {command!r}")


class Playback:
    """
    Season auto-advance.

    Steps "all" -> first season -> ... -> last season, then stops.
    The caller owns the timer: call tick() every `interval_s` seconds
    while `playing` is true and stop() to cancel.
    """

    def __init__(self, speed_ms: Optional[int] = None, seasons: Optional[Sequence[str]] = None):
        self.seasons = list(seasons or config.SEASONS)
        self.playing = False
        self.set_speed(config.PLAY_SPEED_MS if speed_ms is None else speed_ms)

    @property
    def interval_s(self) -> float:
        return self.speed_ms / 1000.0

    def start(self, state: FilterState) -> FilterState:
        """Begin playing; rewinds to "all" if already on the last season."""
        self.playing = True
        if state.season == self.seasons[-1]:
            return reduce(state, SetSeason(ALL), self.seasons)
        return state

    def tick(self, state: FilterState) -> Optional[FilterState]:
        """Next state, or None once playback has run past the last season."""
        if not self.playing:
            return None
        if state.season == self.seasons[-1]:
            self.stop()
            return None
        return reduce(state, AdvanceSeason(), self.seasons)

    def stop(self):
        self.playing = False

    def set_speed(self, speed_ms: int) -> bool:
        """
        Change the tick interval. Returns True when playback is running and
        the caller must reschedule its timer.
        """
        if speed_ms is None or speed_ms <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed_ms}")
        self.speed_ms = speed_ms
        return self.playing
