from pathlib import Path
from typing import Generator, List, Optional, TextIO, Tuple
import csv
import logging

from .errors import DataSourceUnavailable
from .models import REQUIRED_COLUMN_GROUPS, RawShotRecord

logger = logging.getLogger(__name__)


class ShotFileLoader:
    """
    Reads raw shot rows from a delimited text file.
    """
    def __init__(self, path: str | Path, delimiter: str = ","):
        self.path = Path(path)
        if not self.path.exists():
            raise DataSourceUnavailable(f"Shot data file not found: {self.path}")

        self.delimiter = delimiter
        self._fh: Optional[TextIO] = None
        self._columns: Optional[List[str]] = None

    def _ensure_open(self):
        if self._fh is None or self._fh.closed:
            try:
                # Undecodable bytes become U+FFFD and the row parses as usual
                self._fh = self.path.open(newline="", encoding="utf-8-sig", errors="replace")
            except OSError as e:
                raise DataSourceUnavailable(f"Could not open shot data {self.path}: {e}") from e
            logger.info("Reading shot data from %s", self.path)

    def columns(self) -> List[str]:
        """
        Header of the file. Raises DataSourceUnavailable when a required
        column (or every alternate name for it) is missing.
        """
        if self._columns is None:
            self._ensure_open()
            self._fh.seek(0)
            header = next(csv.reader(self._fh, delimiter=self.delimiter), None)
            if not header:
                raise DataSourceUnavailable(f"Shot data file is empty: {self.path}")
            self._columns = [h.strip() for h in header]

            missing = [
                " / ".join(group)
                for group in REQUIRED_COLUMN_GROUPS
                if not any(col in self._columns for col in group)
            ]
            if missing:
                raise DataSourceUnavailable(
                    f"Shot data {self.path} is missing required columns: {', '.join(missing)}"
                )
        return self._columns

    def __iter__(self) -> Generator[Tuple[int, RawShotRecord], None, None]:
        """
        Yields (row_index, RawShotRecord) for every data row.
        """
        columns = self.columns()
        # Always rewind for a fresh pass
        self._fh.seek(0)
        reader = csv.DictReader(self._fh, fieldnames=columns, delimiter=self.delimiter)
        next(reader, None)  # header

        row_idx = -1
        try:
            for row_idx, row in enumerate(reader):
                yield row_idx, RawShotRecord.from_row(row)
        except csv.Error as e:
            raise DataSourceUnavailable(
                f"Shot data {self.path} is unreadable after row {row_idx}: {e}"
            ) from e

    def close(self):
        if self._fh:
            self._fh.close()
            self._fh = None

    def __enter__(self):
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
