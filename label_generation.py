"""Rendering helpers for label sheet output."""

from __future__ import annotations

import logging
from typing import BinaryIO, Sequence, Union

import fitz

from label_sheets import LabelSheet, ReportLabSurface, Unit, resolve
from label_sheets.formats import FormatSource
from label_types import LabelContent

logger = logging.getLogger(__name__)


def open_sheet(
    target: Union[str, BinaryIO],
    label_format: FormatSource,
    unit: Unit | str = Unit.MM,
    start_column: int = 1,
    start_row: int = 1,
    font_name: str = "Helvetica",
) -> tuple[LabelSheet, ReportLabSurface]:
    """Create a ReportLab-backed sheet with its first page open."""

    fmt = resolve(label_format, unit)
    surface = ReportLabSurface(
        target,
        page_size=fmt.page_size,
        unit=fmt.unit,
        font_name=font_name,
        font_size=fmt.font_size,
    )
    surface.add_page()
    sheet = LabelSheet(
        surface,
        fmt,
        unit=fmt.unit,
        start_column=start_column,
        start_row=start_row,
    )
    return sheet, surface


def place(sheet: LabelSheet, label: LabelContent, draw_outline: bool) -> None:
    """Place one label and its overlays into the next cell."""

    sheet.place_label(label.text)
    if label.overlay:
        sheet.place_label_overlay(label.overlay, align=label.overlay_align)
    if label.qr:
        sheet.write_qr_code(
            label.qr,
            align=label.qr_align,
            y_offset=label.qr_offset,
        )
    if label.vertical:
        sheet.vertical_text(
            label.vertical,
            label.vertical_x,
            label.vertical_y,
            direction=label.vertical_direction,
        )
    if draw_outline:
        sheet.outline_cell()


def render(
    output_path: str | None,
    labels: Sequence[LabelContent],
    label_format: FormatSource,
    unit: Unit | str = Unit.MM,
    start_column: int = 1,
    start_row: int = 1,
    font_name: str = "Helvetica",
    font_size: int | None = None,
    draw_outline: bool = False,
) -> str:
    """Render labels to a multi-page PDF."""

    output_path = output_path or "labels.pdf"

    if len(labels) == 0:
        return "No labels were provided; no output generated."

    sheet, surface = open_sheet(
        output_path,
        label_format,
        unit=unit,
        start_column=start_column,
        start_row=start_row,
        font_name=font_name,
    )
    if font_size is not None:
        sheet.set_font_size(font_size)

    for label in labels:
        place(sheet, label, draw_outline)

    surface.save()
    logger.info(
        "Wrote %d labels on %d pages to %s",
        len(labels),
        surface.pages,
        output_path,
    )
    return f"Wrote {len(labels)} labels on {surface.pages} page(s) to {output_path}"


def render_preview(pdf_path: str, page: int = 0, dpi: int = 150) -> bytes:
    """Return PNG bytes of one page of a rendered PDF."""

    with fitz.open(pdf_path) as doc:
        if not 0 <= page < doc.page_count:
            raise ValueError(
                f"Page {page + 1} out of range; document has {doc.page_count} page(s)."
            )
        pix = doc.load_page(page).get_pixmap(dpi=dpi)
        return pix.tobytes("png")
