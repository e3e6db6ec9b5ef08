# pyright: reportUnknownVariableType=false, reportUnknownMemberType=false
# pyright: reportUnknownArgumentType=false, reportAttributeAccessIssue=false
# pyright: reportMissingTypeStubs=false

"""TrueType font registration for unicode label text."""

from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont as VariableTTFont
from fontTools.varLib import instancer
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont as ReportLabTTFont

logger = logging.getLogger(__name__)


def _safe_ps_name(s: str) -> str:
    return re.sub(r"[^A-Za-z0-9-]", "", s)[:63]


def default_font_name(path: Path, weight: float | None = None) -> str:
    """Derive a ReportLab font name from the file name and weight."""

    name = _safe_ps_name(path.stem) or "LabelFont"
    if weight is not None:
        name = f"{name}-w{int(round(weight))}"
    return name


class FontRegistry:
    """Registers TrueType fonts with ReportLab once per name."""

    def __init__(self) -> None:
        self._registered: dict[tuple[str, str], str] = {}

    def register(
        self,
        path: str | Path,
        name: str | None = None,
        weight: float | None = None,
    ) -> str:
        font_path = Path(path)
        if not font_path.exists():
            raise FileNotFoundError(f"Font file '{font_path}' is missing.")

        weight_key = "" if weight is None else f"{float(weight):.1f}"
        key = (str(font_path.resolve()), weight_key)
        cached = self._registered.get(key)
        if cached:
            return cached

        font_name = name or default_font_name(font_path, weight)
        if weight is None:
            source: str | BytesIO = str(font_path)
        else:
            source = _instantiate(font_path, float(weight))
        pdfmetrics.registerFont(ReportLabTTFont(font_name, source))
        self._registered[key] = font_name
        logger.debug("Registered font %s from %s", font_name, font_path)
        return font_name


def _weight_axis(font: VariableTTFont) -> tuple[float, float] | None:
    if "fvar" not in font:
        return None
    for axis in font["fvar"].axes:
        if axis.axisTag == "wght":
            return float(axis.minValue), float(axis.maxValue)
    return None


def _instantiate(font_path: Path, weight: float) -> BytesIO:
    """Pin the ``wght`` axis of a variable font to ``weight``."""

    font = VariableTTFont(BytesIO(font_path.read_bytes()))
    axis = _weight_axis(font)
    if axis is None:
        raise ValueError(
            f"Font '{font_path}' does not expose a wght axis; "
            "register it without a weight."
        )
    weight_min, weight_max = axis
    if not weight_min <= weight <= weight_max:
        raise ValueError(
            f"Font weight {weight} outside supported range "
            f"{weight_min:.0f}-{weight_max:.0f}"
        )
    instancer.instantiateVariableFont(font, {"wght": weight}, inplace=True)
    _rename(font, font_path.stem, weight)
    buffer = BytesIO()
    font.save(buffer)
    buffer.seek(0)
    return buffer


def _rename(font: VariableTTFont, family: str, weight: float) -> None:
    """Give the instance a PostScript name distinct from the source font."""

    nm = font["name"]
    target_ps = _safe_ps_name(f"{family.replace(' ', '')}-W{int(round(weight))}")
    for plat, enc, lang in ((3, 1, 0x409), (1, 0, 0)):
        nm.setName(target_ps, 6, plat, enc, lang)
        nm.setName(f"{family} {int(round(weight))}", 4, plat, enc, lang)


_REGISTRY = FontRegistry()


def register_font(
    path: str | Path,
    name: str | None = None,
    weight: float | None = None,
) -> str:
    """Register a TrueType font and return its ReportLab name."""

    return _REGISTRY.register(path, name=name, weight=weight)


__all__ = [
    "FontRegistry",
    "default_font_name",
    "register_font",
]
