"""Label sheet descriptors and the built-in preset table."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Union

from reportlab.lib import pagesizes

from .errors import InvalidFormatError, UnknownFormatError
from .units import Unit, convert

logger = logging.getLogger(__name__)

PADDING_MM = 3.0

PAPER_SIZES: dict[str, tuple[float, float]] = {
    "letter": pagesizes.LETTER,
    "legal": pagesizes.LEGAL,
    "a3": pagesizes.A3,
    "a4": pagesizes.A4,
    "a5": pagesizes.A5,
}

_ORIENTATIONS = {
    "p": "portrait",
    "portrait": "portrait",
    "l": "landscape",
    "landscape": "landscape",
}

_INT_FIELDS = {"columns", "rows", "font_size"}
_FLOAT_FIELDS = {
    "margin_left", "margin_top", "space_x", "space_y", "width", "height",
}

# classic descriptor keys -> SheetFormat fields
_LEGACY_KEYS = {
    "paper-size": "paper_size",
    "metric": "metric",
    "marginLeft": "margin_left",
    "marginTop": "margin_top",
    "NX": "columns",
    "NY": "rows",
    "SpaceX": "space_x",
    "SpaceY": "space_y",
    "width": "width",
    "height": "height",
    "font-size": "font_size",
    "orientation": "orientation",
}


@dataclass(frozen=True)
class SheetFormat:
    """Label sheet geometry declared in its own ``metric`` unit."""

    paper_size: str
    metric: str
    margin_left: float
    margin_top: float
    columns: int
    rows: int
    space_x: float
    space_y: float
    width: float
    height: float
    font_size: int
    orientation: str = "portrait"


@dataclass(frozen=True)
class Format:
    """Resolved sheet geometry; every length is in ``unit``."""

    paper_size: str
    orientation: str
    unit: Unit
    margin_left: float
    margin_top: float
    space_x: float
    space_y: float
    columns: int
    rows: int
    width: float
    height: float
    font_size: int
    padding: float

    @property
    def page_size(self) -> tuple[float, float]:
        """Return the page size in points, oriented."""

        size = PAPER_SIZES[self.paper_size.lower()]
        if self.orientation == "landscape":
            return pagesizes.landscape(size)
        return pagesizes.portrait(size)


PRESETS: dict[str, SheetFormat] = {
    "5160": SheetFormat(
        paper_size="letter", metric="mm",
        margin_left=1.762, margin_top=10.7,
        columns=3, rows=10,
        space_x=3.175, space_y=0,
        width=66.675, height=25.4, font_size=8,
    ),
    "5161": SheetFormat(
        paper_size="letter", metric="mm",
        margin_left=8, margin_top=10.7,
        columns=2, rows=10,
        space_x=3.967, space_y=0,
        width=101.6, height=25.4, font_size=8,
    ),
    "5162": SheetFormat(
        paper_size="letter", metric="mm",
        margin_left=0.97, margin_top=20.224,
        columns=2, rows=7,
        space_x=4.762, space_y=0,
        width=100.807, height=35.72, font_size=8,
    ),
    "5163": SheetFormat(
        paper_size="letter", metric="mm",
        margin_left=1.762, margin_top=10.7,
        columns=2, rows=5,
        space_x=3.175, space_y=0,
        width=101.6, height=50.8, font_size=8,
    ),
    "5164": SheetFormat(
        paper_size="letter", metric="in",
        margin_left=0.148, margin_top=0.5,
        columns=2, rows=3,
        space_x=0.2031, space_y=0,
        width=4.0, height=3.33, font_size=12,
    ),
    "8600": SheetFormat(
        paper_size="letter", metric="mm",
        margin_left=7.1, margin_top=19,
        columns=3, rows=10,
        space_x=9.5, space_y=3.1,
        width=66.6, height=25.4, font_size=8,
    ),
    "L7163": SheetFormat(
        paper_size="A4", metric="mm",
        margin_left=5, margin_top=15,
        columns=2, rows=7,
        space_x=25, space_y=0,
        width=99.1, height=38.1, font_size=9,
    ),
    "3422": SheetFormat(
        paper_size="A4", metric="mm",
        margin_left=0, margin_top=8.5,
        columns=3, rows=8,
        space_x=0, space_y=0,
        width=70, height=35, font_size=9,
    ),
}

FormatSource = Union[str, SheetFormat, Format, Mapping[str, Any]]


def list_formats() -> list[str]:
    """Return the built-in preset identifiers."""

    return sorted(PRESETS)


def get_format(name: str) -> SheetFormat:
    """Return the raw preset descriptor for ``name``."""

    preset = PRESETS.get(str(name))
    if preset is None:
        raise UnknownFormatError(str(name), list_formats())
    return preset


def sheet_format_from_mapping(data: Mapping[str, Any]) -> SheetFormat:
    """Build a :class:`SheetFormat` from snake_case or classic keys."""

    known = {f.name for f in fields(SheetFormat)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        name = _LEGACY_KEYS.get(key, key)
        if name not in known:
            raise InvalidFormatError(f"Unknown format field '{key}'.")
        kwargs[name] = _coerce(name, value)

    required = [
        f.name for f in fields(SheetFormat) if f.name != "orientation"
    ]
    missing = [name for name in required if name not in kwargs]
    if missing:
        raise InvalidFormatError(
            f"Format is missing required fields: {', '.join(missing)}"
        )
    return SheetFormat(**kwargs)


def _coerce(name: str, value: Any) -> Any:
    if name in _INT_FIELDS:
        number = _as_number(name, value)
        if number != int(number):
            raise InvalidFormatError(
                f"Format field '{name}' must be a whole number, got {value!r}."
            )
        return int(number)
    if name in _FLOAT_FIELDS:
        return _as_number(name, value)
    return value


def _as_number(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFormatError(
            f"Format field '{name}' must be a number, got {value!r}."
        ) from exc
    if not math.isfinite(number):
        raise InvalidFormatError(
            f"Format field '{name}' must be finite, got {value!r}."
        )
    return number


def resolve(source: FormatSource, doc_unit: Unit | str = Unit.MM) -> Format:
    """Resolve a preset id or custom descriptor into document units."""

    unit = Unit(doc_unit)
    if isinstance(source, Format):
        return _reexpress(source, unit)
    if isinstance(source, SheetFormat):
        sheet = source
    elif isinstance(source, Mapping):
        sheet = sheet_format_from_mapping(source)
    else:
        sheet = get_format(source)

    try:
        metric = Unit(sheet.metric)
    except ValueError as exc:
        raise InvalidFormatError(f"Unsupported metric '{sheet.metric}'.") from exc

    _validate(sheet)

    def to_doc(value: float) -> float:
        return convert(float(value), metric, unit)

    resolved = Format(
        paper_size=sheet.paper_size,
        orientation=_ORIENTATIONS[sheet.orientation.lower()],
        unit=unit,
        margin_left=to_doc(sheet.margin_left),
        margin_top=to_doc(sheet.margin_top),
        space_x=to_doc(sheet.space_x),
        space_y=to_doc(sheet.space_y),
        columns=int(sheet.columns),
        rows=int(sheet.rows),
        width=to_doc(sheet.width),
        height=to_doc(sheet.height),
        font_size=sheet.font_size,
        padding=convert(PADDING_MM, Unit.MM, unit),
    )
    logger.debug("Resolved label format %s", resolved)
    return resolved


def _validate(sheet: SheetFormat) -> None:
    if int(sheet.columns) < 1 or int(sheet.rows) < 1:
        raise InvalidFormatError(
            f"Grid must have at least one column and row, got "
            f"{sheet.columns}x{sheet.rows}."
        )
    if sheet.width <= 0 or sheet.height <= 0:
        raise InvalidFormatError(
            f"Label size must be positive, got {sheet.width}x{sheet.height}."
        )
    if sheet.paper_size.lower() not in PAPER_SIZES:
        available = ", ".join(sorted(PAPER_SIZES))
        raise InvalidFormatError(
            f"Unknown paper size '{sheet.paper_size}'. Available: {available}"
        )
    if sheet.orientation.lower() not in _ORIENTATIONS:
        raise InvalidFormatError(
            f"Unknown orientation '{sheet.orientation}'."
        )


def _reexpress(fmt: Format, unit: Unit) -> Format:
    if fmt.unit is unit:
        return fmt

    def to_doc(value: float) -> float:
        return convert(value, fmt.unit, unit)

    return replace(
        fmt,
        unit=unit,
        margin_left=to_doc(fmt.margin_left),
        margin_top=to_doc(fmt.margin_top),
        space_x=to_doc(fmt.space_x),
        space_y=to_doc(fmt.space_y),
        width=to_doc(fmt.width),
        height=to_doc(fmt.height),
        padding=to_doc(fmt.padding),
    )
