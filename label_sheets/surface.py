"""Drawing surfaces the label sheet engine renders through."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Union

from reportlab.lib.units import inch, mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from .units import Unit
from .utils import Align, align_offset, wrap_text_to_width

logger = logging.getLogger(__name__)

TextMatrix = tuple[float, float, float, float]

_POINTS_PER_UNIT = {
    Unit.MM: mm,
    Unit.INCH: inch,
}


class DrawingSurface(ABC):
    """Paginated canvas addressed in document units from the top-left.

    Implementations keep a text cursor (``x``, ``y``) that
    :meth:`multi_cell` starts from and advances.
    """

    x: float = 0.0
    y: float = 0.0

    @property
    @abstractmethod
    def scale_factor(self) -> float:
        """Return device units (points) per document unit."""

    @property
    @abstractmethod
    def page_height(self) -> float:
        """Return the page height in document units."""

    @abstractmethod
    def add_page(self) -> None:
        """Start a new page."""

    def set_xy(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    @abstractmethod
    def set_font_size(self, points: float) -> None:
        """Change the active font size."""

    @abstractmethod
    def multi_cell(
        self,
        width: float,
        line_height: float,
        text: str,
        align: str = "left",
    ) -> None:
        """Draw ``text`` word-wrapped to ``width`` at the cursor."""

    @abstractmethod
    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: bool = True,
    ) -> None:
        """Draw a rectangle at absolute document coordinates."""

    @abstractmethod
    def glyph_run(
        self,
        text: str,
        matrix: TextMatrix,
        x: float,
        y: float,
    ) -> None:
        """Emit ``text`` with ``matrix`` at device coordinates ``x``, ``y``."""

    @abstractmethod
    def uses_glyph_subset(self) -> bool:
        """Return whether the active font is an embedded multi-byte subset."""

    @abstractmethod
    def glyph_width(self, codepoint: int) -> float:
        """Return the active font's advance width for ``codepoint``.

        Zero means the font has no glyph for it.
        """

    @abstractmethod
    def disable_print_scaling(self) -> None:
        """Ask viewers to print the document at actual size."""


class ReportLabSurface(DrawingSurface):
    """:class:`DrawingSurface` on top of a ReportLab canvas."""

    def __init__(
        self,
        target: Union[str, BinaryIO],
        page_size: tuple[float, float],
        unit: Unit | str = Unit.MM,
        font_name: str = "Helvetica",
        font_size: float = 8,
    ) -> None:
        self._canvas = canvas.Canvas(target, pagesize=page_size)
        self._unit = Unit(unit)
        self._k = _POINTS_PER_UNIT[self._unit]
        self._page_height_pt = page_size[1]
        self._font_name = font_name
        self._font_size = font_size
        self._pages = 0
        self.x = 0.0
        self.y = 0.0

    @property
    def scale_factor(self) -> float:
        return self._k

    @property
    def page_height(self) -> float:
        return self._page_height_pt / self._k

    @property
    def pages(self) -> int:
        return self._pages

    def add_page(self) -> None:
        # ReportLab opens the first page implicitly
        if self._pages:
            self._canvas.showPage()
        self._pages += 1
        self.set_xy(0.0, 0.0)
        logger.debug("Started page %d", self._pages)

    def set_font_size(self, points: float) -> None:
        self._font_size = points

    def multi_cell(
        self,
        width: float,
        line_height: float,
        text: str,
        align: str = "left",
    ) -> None:
        align = Align.parse(align)
        lines = list(
            wrap_text_to_width(
                text=text,
                font_name=self._font_name,
                font_size=self._font_size,
                max_width_pt=width * self._k,
            )
        )
        if not lines:
            return

        font_size_units = self._font_size / self._k
        self._canvas.setFont(self._font_name, self._font_size)
        top = self.y
        for line in lines:
            if line:
                line_width = (
                    stringWidth(line, self._font_name, self._font_size)
                    / self._k
                )
                left = self.x + align_offset(width, line_width, align)
                baseline = top + 0.5 * line_height + 0.3 * font_size_units
                self._canvas.drawString(
                    left * self._k,
                    self._page_height_pt - baseline * self._k,
                    line,
                )
            top += line_height
        self.y = top

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: bool = True,
    ) -> None:
        self._canvas.rect(
            x * self._k,
            self._page_height_pt - (y + height) * self._k,
            width * self._k,
            height * self._k,
            stroke=0 if fill else 1,
            fill=1 if fill else 0,
        )

    def glyph_run(
        self,
        text: str,
        matrix: TextMatrix,
        x: float,
        y: float,
    ) -> None:
        text_obj = self._canvas.beginText()
        text_obj.setFont(self._font_name, self._font_size)
        a, b, c, d = matrix
        text_obj.setTextTransform(a, b, c, d, x, y)
        text_obj.textOut(text)
        self._canvas.drawText(text_obj)

    def uses_glyph_subset(self) -> bool:
        return isinstance(pdfmetrics.getFont(self._font_name), TTFont)

    def glyph_width(self, codepoint: int) -> float:
        font = pdfmetrics.getFont(self._font_name)
        if not isinstance(font, TTFont):
            return stringWidth(chr(codepoint), self._font_name, 1000)
        face = font.face
        if codepoint not in face.charToGlyph:
            return 0.0
        return float(face.charWidths.get(codepoint, 0))

    def disable_print_scaling(self) -> None:
        self._canvas.setViewerPreference("PrintScaling", "None")

    def save(self) -> None:
        self._canvas.save()
