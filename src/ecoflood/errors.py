"""Exception types raised by EcoFlood services."""


class EcoFloodError(Exception):
    """Base class for application errors."""


class DataSourceError(EcoFloodError):
    """A live data source could not deliver a usable payload."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class ReportStoreError(EcoFloodError):
    """Community reports could not be read or written."""
