"""ShotChart - Shot coordinate normalization, cross-filtering and shooting stats."""

from .catalog import (
    ShotCatalog,
    build_catalog,
    load_catalog,
    load_catalog_async,
)
from .errors import DataSourceUnavailable, MalformedRecord, ShotChartError
from .filters import FilterIndex, build_index
from .models import (
    ALL,
    ChartView,
    FilterState,
    NormalizedShot,
    RawShotRecord,
    ShotStats,
    ZoneStat,
)
from .normalize import CoordinateNormalizer, normalize
from .pipeline import ShotChartSession
from .stats import compute
from .zones import ZONES, ZoneClassifier, ZoneRegion
