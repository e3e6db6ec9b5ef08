"""Fixed-grid label sheet layout.

A :class:`LabelSheet` walks the cells of a label sheet left to right, top
to bottom, asking its drawing surface for a new page whenever the grid is
exhausted. Every placement works in document units relative to the
current cell.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .errors import LabelSheetError, MatrixGenerationError
from .formats import Format, FormatSource, resolve
from .matrix import ErrorCorrection, Matrix, MatrixGenerator, QrCodeGenerator
from .surface import DrawingSurface, TextMatrix
from .units import Unit, line_height_for
from .utils import Align, align_offset

logger = logging.getLogger(__name__)

# y bias lining overlays up with the text block baseline
_Y_BIAS = 1.0


class Direction(StrEnum):
    DOWN = "down"
    UP = "up"

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        key = str(value).strip().lower()
        for direction in cls:
            if key in (direction.value, direction.value[0]):
                return direction
        raise ValueError(f"Unknown text direction '{value}'.")


_TEXT_MATRICES: dict[Direction, TextMatrix] = {
    Direction.DOWN: (0, -1, 1, 0),
    Direction.UP: (0, 1, -1, 0),
}


@dataclass(frozen=True)
class CellRect:
    x: float
    y: float
    width: float
    height: float


class LabelSheet:
    """Places label content cell by cell on a :class:`DrawingSurface`."""

    def __init__(
        self,
        surface: DrawingSurface,
        label_format: FormatSource,
        unit: Unit | str = Unit.MM,
        start_column: int = 1,
        start_row: int = 1,
        matrix_generator: MatrixGenerator | None = None,
    ) -> None:
        self._surface = surface
        self._format = resolve(label_format, unit)
        self._matrices = matrix_generator or QrCodeGenerator()
        self._line_height = 0.0
        self._font_size = self._format.font_size
        self.set_font_size(self._format.font_size)
        self._surface.disable_print_scaling()

        fmt = self._format
        if not 1 <= start_column <= fmt.columns or not 1 <= start_row <= fmt.rows:
            raise LabelSheetError(
                f"Start position ({start_column}, {start_row}) is outside the "
                f"{fmt.columns}x{fmt.rows} grid."
            )

        # the first advance lands on (start_column, start_row)
        self._column = start_column - 2
        self._row = start_row - 1
        self._pages_added = 0
        self._rect: CellRect | None = None

    @property
    def format(self) -> Format:
        return self._format

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def column(self) -> int:
        return self._column

    @property
    def row(self) -> int:
        return self._row

    @property
    def pages_added(self) -> int:
        """Number of pages this sheet requested from the surface."""

        return self._pages_added

    @property
    def font_size(self) -> float:
        return self._font_size

    @property
    def line_height(self) -> float:
        return self._line_height

    @property
    def inset_width(self) -> float:
        fmt = self._format
        return fmt.width - fmt.padding * 2 - fmt.margin_left * 2

    @property
    def usable_width(self) -> float:
        return self.inset_width + 1

    def set_font_size(self, points: float) -> None:
        """Set the font size together with its line height."""

        self._line_height = line_height_for(points, self._format.unit)
        self._font_size = points
        self._surface.set_font_size(points)

    def set_line_height(self, points: float) -> None:
        """Use the line height of ``points`` without touching the font."""

        self._line_height = line_height_for(points, self._format.unit)

    def advance(self) -> CellRect:
        """Move to the next cell, starting a new page past the last row."""

        self._column += 1
        if self._column == self._format.columns:
            self._column = 0
            self._row += 1
            if self._row == self._format.rows:
                self._row = 0
                self._surface.add_page()
                self._pages_added += 1
        self._rect = self._compute_rect()
        return self._rect

    def active_rect(self) -> CellRect:
        if self._rect is None:
            raise LabelSheetError("No active label; call place_label first.")
        return self._rect

    def _compute_rect(self) -> CellRect:
        fmt = self._format
        return CellRect(
            x=(
                fmt.margin_left
                + self._column * (fmt.width + fmt.space_x)
                + fmt.padding
            ),
            y=(
                fmt.margin_top
                + self._row * (fmt.height + fmt.space_y)
                + fmt.padding
            ),
            width=fmt.width,
            height=fmt.height,
        )

    def anchor(self, x_offset: float, y_offset: float) -> tuple[float, float]:
        """Resolve a signed offset against the active cell.

        Negative values measure from the right and bottom edges.
        """

        rect = self.active_rect()
        x = rect.x + x_offset
        if x_offset < 0:
            x += self.inset_width
        y = rect.y + y_offset
        if y_offset < 0:
            y += rect.height - self._format.padding * 2
        return x, y - _Y_BIAS

    def place_label(self, text: str, substitute: str | None = " ") -> None:
        """Advance to the next cell and write ``text`` into it."""

        self.advance()
        self._write_block(text, Align.LEFT, substitute)

    def place_label_overlay(
        self,
        text: str,
        align: str = "left",
        substitute: str | None = " ",
    ) -> None:
        """Write another text block into the current cell."""

        self._write_block(text, align, substitute)

    def _write_block(
        self,
        text: str,
        align: str | Align,
        substitute: str | None,
    ) -> None:
        rect = self.active_rect()
        self._surface.set_xy(rect.x, rect.y)
        if substitute is not None:
            text = self.scrub(text, substitute)
        self._surface.multi_cell(
            self._format.width - self._format.padding,
            self._line_height,
            text,
            Align.parse(align),
        )

    def scrub(self, text: str, substitute: str = " ") -> str:
        """Replace characters the active font cannot draw."""

        if not self._surface.uses_glyph_subset():
            return text
        for char in set(text):
            if ord(char) < 128:
                continue
            if self._surface.glyph_width(ord(char)) == 0:
                text = text.replace(char, substitute)
        return text

    def vertical_text(
        self,
        text: str,
        x_offset: float,
        y_offset: float,
        direction: str = "down",
    ) -> None:
        """Draw single-line ``text`` rotated by 90 degrees."""

        matrix = _TEXT_MATRICES[Direction.parse(direction)]
        x, y = self.anchor(x_offset, y_offset)
        k = self._surface.scale_factor
        self._surface.glyph_run(
            text,
            matrix,
            x * k,
            (self._surface.page_height - y) * k,
        )

    def write_qr_code(
        self,
        text: str,
        align: str = "left",
        y_offset: float = 0,
        error_correction: str = "low",
        module_scale: float = 1,
    ) -> int:
        """Stamp a QR code into the current cell.

        Returns the number of modules drawn; a code that cannot be
        generated is logged and skipped.
        """

        rect = self.active_rect()
        try:
            matrix = self._module_matrix(text, error_correction)
        except MatrixGenerationError as exc:
            logger.warning("%s", exc)
            return 0

        k = self._surface.scale_factor
        module_w = module_scale / k
        module_h = module_scale / k
        x_start = rect.x + align_offset(
            self.usable_width,
            matrix.columns * module_w,
            align,
        )
        _, y = self.anchor(0, y_offset)

        drawn = 0
        for row in matrix.modules:
            x = x_start
            for filled in row:
                if filled:
                    self._surface.rect(x, y, module_w, module_h)
                    drawn += 1
                x += module_w
            y += module_h
        return drawn

    def _module_matrix(self, text: str, error_correction: str) -> Matrix:
        level = ErrorCorrection.parse(error_correction)
        matrix = self._matrices.generate(text, level)
        if matrix.is_empty:
            raise MatrixGenerationError(
                f"QR code generation failed for text: {text!r}"
            )
        return matrix

    def outline_cell(self) -> None:
        """Stroke the border of the current cell."""

        rect = self.active_rect()
        padding = self._format.padding
        self._surface.rect(
            rect.x - padding,
            rect.y - padding,
            rect.width,
            rect.height,
            fill=False,
        )
