"""Exceptions raised by the label sheet engine."""

from __future__ import annotations


class LabelSheetError(Exception):
    """Base class for label sheet failures."""


class UnknownFormatError(LabelSheetError, ValueError):
    """Raised when a preset identifier is not in the built-in table."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown label format '{name}'. Available formats: "
            f"{', '.join(available)}"
        )


class InvalidFormatError(LabelSheetError, ValueError):
    """Raised when a custom format descriptor is incomplete or inconsistent."""


class UnsupportedFontSizeError(LabelSheetError, ValueError):
    """Raised for font sizes missing from the line height table."""

    def __init__(self, size: float) -> None:
        self.size = size
        super().__init__(
            f"Invalid font size: {size} (supported sizes are 6 to 15 pt)"
        )


class MatrixGenerationError(LabelSheetError):
    """Raised when the matrix-code generator returns an empty matrix."""
