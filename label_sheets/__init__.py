"""Fixed-grid label sheet layout for PDF label printing."""

from __future__ import annotations

from .errors import (
    InvalidFormatError,
    LabelSheetError,
    MatrixGenerationError,
    UnknownFormatError,
    UnsupportedFontSizeError,
)
from .formats import (
    PRESETS,
    Format,
    SheetFormat,
    get_format,
    list_formats,
    resolve,
)
from .matrix import ErrorCorrection, Matrix, MatrixGenerator, QrCodeGenerator
from .sheet import CellRect, Direction, LabelSheet
from .surface import DrawingSurface, ReportLabSurface
from .units import Unit, convert, line_height_for
from .utils import Align, align_offset

__all__ = [
    "Align",
    "CellRect",
    "Direction",
    "DrawingSurface",
    "ErrorCorrection",
    "Format",
    "InvalidFormatError",
    "LabelSheet",
    "LabelSheetError",
    "Matrix",
    "MatrixGenerationError",
    "MatrixGenerator",
    "PRESETS",
    "QrCodeGenerator",
    "ReportLabSurface",
    "SheetFormat",
    "UnknownFormatError",
    "Unit",
    "UnsupportedFontSizeError",
    "align_offset",
    "convert",
    "get_format",
    "line_height_for",
    "list_formats",
    "resolve",
]
