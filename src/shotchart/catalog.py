from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union
import asyncio
import logging

from .errors import MalformedRecord
from .loader import ShotFileLoader
from .models import NormalizedShot, RawShotRecord
from .normalize import CoordinateNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShotCatalog:
    """
    The loaded, normalized shots. Never mutated after build.

    skipped: rows dropped as MalformedRecord.
    excluded: rows dropped for having no position.
    """
    shots: Tuple[NormalizedShot, ...]
    skipped: int = 0
    excluded: int = 0

    def __len__(self) -> int:
        return len(self.shots)

    def __iter__(self) -> Iterator[NormalizedShot]:
        return iter(self.shots)

    def __getitem__(self, idx: int) -> NormalizedShot:
        return self.shots[idx]


RawRows = Iterable[Union[RawShotRecord, Tuple[int, RawShotRecord]]]


def build_catalog(
    records: RawRows,
    normalizer: Optional[CoordinateNormalizer] = None,
) -> ShotCatalog:
    """
    Normalize raw records into a catalog.

    Accepts bare RawShotRecords or (row_index, RawShotRecord) pairs as
    produced by ShotFileLoader. Malformed rows are counted and skipped;
    rows without a position are dropped.
    """
    normalizer = normalizer or CoordinateNormalizer()
    shots = []
    skipped = 0
    excluded = 0

    for i, item in enumerate(records):
        row_idx, raw = item if isinstance(item, tuple) else (i, item)
        try:
            shot = normalizer.normalize(raw)
        except MalformedRecord as e:
            skipped += 1
            logger.debug("Skipping row %d: %s", row_idx, e)
            continue

        if not shot.position:
            excluded += 1
            continue
        shots.append(shot)

    if skipped:
        logger.warning("Skipped %d malformed shot rows", skipped)
    logger.info("Loaded %s shots", f"{len(shots):,}")
    return ShotCatalog(shots=tuple(shots), skipped=skipped, excluded=excluded)


def load_catalog(
    path: str | Path,
    normalizer: Optional[CoordinateNormalizer] = None,
) -> ShotCatalog:
    """
    Read and normalize a shot file.

    Raises:
        DataSourceUnavailable: the file is missing, unreadable or lacks
            required columns.
    """
    with ShotFileLoader(path) as loader:
        return build_catalog(loader, normalizer)


async def load_catalog_async(
    path: str | Path,
    normalizer: Optional[CoordinateNormalizer] = None,
) -> ShotCatalog:
    """load_catalog off the event loop thread."""
    return await asyncio.to_thread(load_catalog, path, normalizer)
