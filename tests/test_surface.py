import re
import unittest
from io import BytesIO
from pathlib import Path

import fitz
import reportlab
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.units import inch, mm

from fonts import register_font
from label_sheets import LabelSheet, ReportLabSurface

VERA = Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


def _pdf_bytes(surface: ReportLabSurface, buffer: BytesIO) -> bytes:
    surface.save()
    return buffer.getvalue()


class ReportLabSurfaceTests(unittest.TestCase):
    def test_scale_and_page_height(self) -> None:
        surface = ReportLabSurface(BytesIO(), letter, "mm")
        self.assertAlmostEqual(surface.scale_factor, mm)
        self.assertAlmostEqual(surface.page_height, 279.4)

        surface = ReportLabSurface(BytesIO(), letter, "in")
        self.assertAlmostEqual(surface.scale_factor, inch)
        self.assertAlmostEqual(surface.page_height, 11.0)

    def test_first_add_page_does_not_emit_blank_page(self) -> None:
        buffer = BytesIO()
        surface = ReportLabSurface(buffer, A4, "mm")
        surface.add_page()
        surface.add_page()
        self.assertEqual(surface.pages, 2)
        data = _pdf_bytes(surface, buffer)
        self.assertTrue(data.startswith(b"%PDF"))
        with fitz.open(stream=data, filetype="pdf") as doc:
            self.assertEqual(doc.page_count, 2)

    def test_disable_print_scaling(self) -> None:
        buffer = BytesIO()
        surface = ReportLabSurface(buffer, letter, "mm")
        surface.disable_print_scaling()
        self.assertRegex(_pdf_bytes(surface, buffer), re.compile(rb"/PrintScaling\s*/None"))

    def test_multi_cell_advances_cursor(self) -> None:
        surface = ReportLabSurface(BytesIO(), letter, "mm")
        surface.set_xy(10, 10)
        surface.multi_cell(100, 5, "first\nsecond")
        self.assertAlmostEqual(surface.y, 20)
        self.assertAlmostEqual(surface.x, 10)

    def test_multi_cell_wraps_to_width(self) -> None:
        surface = ReportLabSurface(BytesIO(), letter, "mm")
        surface.set_xy(0, 0)
        surface.multi_cell(10, 3, "Hello world")
        self.assertAlmostEqual(surface.y, 6)

    def test_multi_cell_text_lands_on_page(self) -> None:
        buffer = BytesIO()
        surface = ReportLabSurface(buffer, letter, "mm")
        surface.set_xy(20, 20)
        surface.multi_cell(80, 4, "Jane Doe", align="center")
        with fitz.open(stream=_pdf_bytes(surface, buffer), filetype="pdf") as doc:
            page = doc.load_page(0)
            self.assertIn("Jane Doe", page.get_text())
            hits = page.search_for("Jane Doe")
        self.assertTrue(hits)
        # centered within 20..100 mm
        center_pt = (hits[0].x0 + hits[0].x1) / 2
        self.assertAlmostEqual(center_pt, 60 * mm, delta=2)
        # top-left origin: near the top of the page
        self.assertLess(hits[0].y0, 30 * mm)

    def test_glyph_run_draws_text(self) -> None:
        buffer = BytesIO()
        surface = ReportLabSurface(buffer, letter, "mm")
        surface.glyph_run("ROTATED", (0, -1, 1, 0), 100, 500)
        with fitz.open(stream=_pdf_bytes(surface, buffer), filetype="pdf") as doc:
            self.assertIn("ROTATED", doc.load_page(0).get_text())

    def test_type1_font_has_no_glyph_subset(self) -> None:
        surface = ReportLabSurface(BytesIO(), letter, "mm")
        self.assertFalse(surface.uses_glyph_subset())
        self.assertGreater(surface.glyph_width(ord("A")), 0)


@unittest.skipUnless(VERA.exists(), "ReportLab bundled Vera font not found")
class TrueTypeSurfaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.font_name = register_font(VERA)

    def test_glyph_lookup(self) -> None:
        surface = ReportLabSurface(BytesIO(), letter, "mm", font_name=self.font_name)
        self.assertTrue(surface.uses_glyph_subset())
        self.assertGreater(surface.glyph_width(ord("A")), 0)
        self.assertEqual(surface.glyph_width(0x4E2D), 0)

    def test_sheet_scrubs_against_real_font(self) -> None:
        buffer = BytesIO()
        surface = ReportLabSurface(buffer, letter, "mm", font_name=self.font_name)
        surface.add_page()
        sheet = LabelSheet(surface, "5160")
        self.assertEqual(sheet.scrub("5中", "?"), "5?")
        self.assertEqual(sheet.scrub("café", "?"), "café")
        sheet.place_label("Box 中 7")
        with fitz.open(stream=_pdf_bytes(surface, buffer), filetype="pdf") as doc:
            self.assertIn("Box", doc.load_page(0).get_text())


if __name__ == "__main__":
    unittest.main()
