"""
Multi-dimensional filter index over a shot catalog.

Each dimension is held as a numpy column; each active filter becomes a
boolean mask over the catalog and the subset is the AND of all masks.
Subsets are always recomputed from scratch and keep catalog order.
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple
import numpy as np

from .models import ALL, MADE, FilterState, NormalizedShot

DIMENSIONS: Tuple[str, ...] = (
    "season",
    "team",
    "player",
    "position",
    "zone",
    "made",
    "shot_type",
)

# Dimensions that feed selectable option lists
OPTION_DIMENSIONS: Tuple[str, ...] = (
    "season",
    "team",
    "player",
    "position",
    "zone",
    "shot_type",
)


def position_mask(upper_positions: np.ndarray, codes: Iterable[str]) -> np.ndarray:
    """
    OR across position codes, substring based on the uppercased position:
    G -> contains "G", F -> contains "F", C -> equals "C" or contains "CENTER".
    Unknown codes match everything. "G-F" satisfies both G and F.
    """
    mask = np.zeros(len(upper_positions), dtype=bool)
    for code in codes:
        code = code.upper()
        if code == "G":
            mask |= np.char.find(upper_positions, "G") >= 0
        elif code == "F":
            mask |= np.char.find(upper_positions, "F") >= 0
        elif code == "C":
            mask |= (upper_positions == "C") | (np.char.find(upper_positions, "CENTER") >= 0)
        else:
            mask[:] = True
    return mask


class FilterIndex:
    """
    Index built once over the catalog.

    apply() installs predicates for a FilterState and returns the subset.
    cascading_values() answers "which values of this dimension are still
    reachable under every other active filter".
    """

    def __init__(self, shots: Iterable[NormalizedShot]):
        self.shots: Tuple[NormalizedShot, ...] = tuple(shots)
        n = len(self.shots)

        self._columns: Dict[str, np.ndarray] = {
            "season": np.array([s.season for s in self.shots], dtype=str),
            "team": np.array([s.team for s in self.shots], dtype=str),
            "player": np.array([s.player for s in self.shots], dtype=str),
            "position": np.array([s.position for s in self.shots], dtype=str),
            "zone": np.array([s.zone for s in self.shots], dtype=str),
            "made": np.fromiter((s.made for s in self.shots), dtype=bool, count=n),
            "shot_type": np.array([s.shot_type for s in self.shots], dtype=str),
        }
        self._upper_positions = np.char.upper(self._columns["position"])

        # Currently installed per-dimension predicates
        self.predicates: Dict[str, np.ndarray] = {}
        self._baselines: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self.shots)

    def _dimension_mask(self, dimension: str, state: FilterState) -> Optional[np.ndarray]:
        """Mask for one dimension, or None when the state leaves it unconstrained."""
        if dimension not in self._columns:
            raise KeyError(f"Unknown filter dimension: {dimension!r}")
        if not state.is_constrained(dimension):
            return None

        col = self._columns[dimension]
        if dimension == "season":
            return col == state.season
        if dimension == "made":
            return col == (state.shot_result == MADE)
        if dimension == "position":
            return position_mask(self._upper_positions, state.positions)

        values = {
            "team": state.teams,
            "player": state.players,
            "zone": state.zones,
            "shot_type": state.shot_types,
        }[dimension]
        return np.isin(col, np.array(sorted(values), dtype=str))

    def masks(self, state: FilterState, exclude: Optional[str] = None) -> Dict[str, np.ndarray]:
        out = {}
        for dim in DIMENSIONS:
            if dim == exclude:
                continue
            mask = self._dimension_mask(dim, state)
            if mask is not None:
                out[dim] = mask
        return out

    def _combine(self, masks: Mapping[str, np.ndarray]) -> np.ndarray:
        combined = np.ones(len(self.shots), dtype=bool)
        for mask in masks.values():
            combined &= mask
        return combined

    def _select(self, mask: np.ndarray) -> Tuple[NormalizedShot, ...]:
        return tuple(self.shots[i] for i in np.flatnonzero(mask))

    def apply(self, state: FilterState) -> Tuple[NormalizedShot, ...]:
        """
        Clear every predicate, install one per constrained field of
        `state`, and return the matching shots in catalog order.
        """
        self.predicates.clear()
        self.predicates.update(self.masks(state))
        return self._select(self._combine(self.predicates))

    @staticmethod
    def _distinct(values: np.ndarray) -> Tuple:
        uniq = np.unique(values).tolist()
        return tuple(v for v in uniq if v != "")

    def cascading_values(self, dimension: str, state: FilterState) -> Tuple:
        """
        Sorted distinct non-empty values of `dimension` across the subset
        selected by every active filter except the one on `dimension`.
        """
        if dimension not in self._columns:
            raise KeyError(f"Unknown filter dimension: {dimension!r}")
        mask = self._combine(self.masks(state, exclude=dimension))
        return self._distinct(self._columns[dimension][mask])

    def all_values(self, dimension: str) -> Tuple:
        if dimension not in self._columns:
            raise KeyError(f"Unknown filter dimension: {dimension!r}")
        return self._distinct(self._columns[dimension])

    def options(self, state: FilterState) -> Dict[str, Tuple]:
        """
        Option lists for every selectable dimension.

        Unconstrained dimensions are narrowed to values reachable under the
        other filters. Constrained dimensions get their full list, so every
        current pick stays selectable however it was made.
        """
        out = {}
        for dim in OPTION_DIMENSIONS:
            if state.is_constrained(dim):
                out[dim] = self.all_values(dim)
            else:
                out[dim] = self.cascading_values(dim, state)
        return out

    def baseline(self, season: str = ALL) -> float:
        """League FG% over one season, or the whole catalog for "all"."""
        if season not in self._baselines:
            made = self._columns["made"]
            if season != ALL:
                made = made[self._columns["season"] == season]
            self._baselines[season] = float(made.mean()) if len(made) else 0.0
        return self._baselines[season]


def build_index(shots: Iterable[NormalizedShot]) -> FilterIndex:
    return FilterIndex(shots)


def apply_all(index: FilterIndex, state: FilterState) -> Tuple[NormalizedShot, ...]:
    return index.apply(state)
