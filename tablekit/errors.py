"""Error types raised by the engine and caught at the analysis boundary."""
from __future__ import annotations


class TableError(ValueError):
    """Base class for table validation and parsing failures."""


class ColumnNotFoundError(TableError):
    def __init__(self, role: str, column: str) -> None:
        self.role = role
        self.column = column
        super().__init__(f"{role} column '{column}' not found in data")


class TableParseError(TableError):
    pass


class UnsupportedFileTypeError(TableError):
    def __init__(self, file_type: str) -> None:
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type}")


class AggregateOverflowError(TableError):
    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Aggregate of column '{column}' exceeds the float range")
