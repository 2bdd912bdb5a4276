from pathlib import Path
from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple
import logging

from . import config
from .catalog import ShotCatalog, load_catalog, load_catalog_async
from .filters import FilterIndex, build_index
from .models import ChartView, FilterState, NormalizedShot
from .normalize import CoordinateNormalizer
from .state import Playback, ResetFilters, ToggleZone, reduce
from .stats import compute
from .zones import ZoneClassifier, default_classifier

logger = logging.getLogger(__name__)


class ShotChartSession:
    """
    Holds the catalog, its index and the current ChartView.

    Every command is reduced into a new FilterState and the subset,
    statistics and option lists are rebuilt synchronously. The finished
    view replaces the old one in a single assignment, so a reader never
    sees a half-updated view.
    """

    def __init__(
        self,
        catalog: ShotCatalog,
        seasons: Optional[Sequence[str]] = None,
        speed_ms: Optional[int] = None,
        classifier: Optional[ZoneClassifier] = None,
    ):
        self.catalog = catalog
        self.seasons = list(seasons or config.SEASONS)
        self.index: FilterIndex = build_index(catalog)
        self.playback = Playback(speed_ms=speed_ms, seasons=self.seasons)
        self.classifier = classifier or default_classifier()
        self._view = self._build_view(FilterState())

    @classmethod
    def open(
        cls,
        path: Optional[str | Path] = None,
        normalizer: Optional[CoordinateNormalizer] = None,
        **kwargs,
    ) -> "ShotChartSession":
        """
        Validate settings, load a shot file and build a session.
        ValueError (bad settings) and DataSourceUnavailable propagate;
        there is no partial start.
        """
        config.validate_config()
        catalog = load_catalog(path or config.DATA_PATH, normalizer)
        logger.info("Session ready: %d shots, %d rows skipped", len(catalog), catalog.skipped)
        return cls(catalog, **kwargs)

    @classmethod
    async def open_async(
        cls,
        path: Optional[str | Path] = None,
        normalizer: Optional[CoordinateNormalizer] = None,
        **kwargs,
    ) -> "ShotChartSession":
        config.validate_config()
        catalog = await load_catalog_async(path or config.DATA_PATH, normalizer)
        return cls(catalog, **kwargs)

    @property
    def view(self) -> ChartView:
        return self._view

    @property
    def state(self) -> FilterState:
        return self._view.state

    def _build_view(self, state: FilterState) -> ChartView:
        subset = self.index.apply(state)
        baseline = self.index.baseline(state.season)
        stats = compute(subset, baseline, zone_filtered=bool(state.zones))
        return ChartView(
            state=state,
            subset=subset,
            stats=stats,
            options=MappingProxyType(self.index.options(state)),
        )

    def _publish(self, state: FilterState) -> ChartView:
        view = self._build_view(state)
        self._view = view
        return view

    def dispatch(self, command) -> ChartView:
        """Apply one command and return the new view."""
        if isinstance(command, ResetFilters):
            self.playback.stop()
        return self._publish(reduce(self.state, command, self.seasons))

    def click_zone(self, x: float, y: float, display: bool = True) -> ChartView:
        """
        Toggle the zone under a click. (x, y) are feet in the rotated
        display frame unless display=False.
        """
        if display:
            zone = self.classifier.zone_at_display(x, y)
        else:
            zone = self.classifier.zone_of(x, y)
        return self.dispatch(ToggleZone(zone))

    def start_playback(self) -> ChartView:
        return self._publish(self.playback.start(self.state))

    def tick(self) -> Optional[ChartView]:
        """One playback step. None when playback is stopped or has finished."""
        state = self.playback.tick(self.state)
        if state is None:
            return None
        return self._publish(state)

    def stop_playback(self):
        self.playback.stop()

    def zone_label_mismatches(self) -> List[Tuple[NormalizedShot, str]]:
        return self.classifier.label_mismatches(self.catalog)
