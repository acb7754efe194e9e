"""Custom exceptions for Netto-It."""


class NettoItError(Exception):
    """Base exception for Netto-It errors."""


class UnknownRateTableError(NettoItError):
    """Raised when no rate table exists for the requested year."""

    def __init__(self, year: int, available: list[int]):
        self.year = year
        self.available = available
        years = ", ".join(str(y) for y in available)
        super().__init__(f"No rate table for {year}. Available: {years}")


class DocumentImportError(NettoItError):
    """Raised when an export document cannot be imported."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Import failed: {message} ({source})")


class StorageError(NettoItError):
    """Raised when the key-value storage cannot be read or written."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Storage error ({key}): {message}")
