class ShotChartError(Exception):
    """Base class for shot chart errors."""


class DataSourceUnavailable(ShotChartError, RuntimeError):
    """The raw shot data could not be read. Fatal to initialization."""


class MalformedRecord(ShotChartError, ValueError):
    """
    A single row failed coordinate or required-field parsing.
    The row is dropped from the catalog and counted; loading continues.
    """

    def __init__(self, message: str, field: str = "", value: object = None):
        super().__init__(message)
        self.field = field
        self.value = value
