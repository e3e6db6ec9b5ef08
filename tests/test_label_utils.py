import unittest

from reportlab.pdfbase.pdfmetrics import stringWidth

from label_sheets.utils import Align, align_offset, wrap_text_to_width


class LabelUtilsTests(unittest.TestCase):
    def test_wrap_text_to_width_empty(self) -> None:
        self.assertEqual(list(wrap_text_to_width("", "Helvetica", 12, 100)), [])
        self.assertEqual(list(wrap_text_to_width("Hello", "Helvetica", 12, 0)), [])

    def test_wrap_text_to_width_single_line(self) -> None:
        lines = list(wrap_text_to_width("Hello world", "Helvetica", 12, 1000))
        self.assertEqual(lines, ["Hello world"])

    def test_wrap_text_to_width_enforces_width(self) -> None:
        max_width = 30
        lines = list(wrap_text_to_width("Hello world", "Helvetica", 12, max_width))
        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(stringWidth(line, "Helvetica", 12), max_width)

    def test_wrap_text_to_width_keeps_newlines(self) -> None:
        lines = list(
            wrap_text_to_width("Jane Doe\n\n1 Main St", "Helvetica", 8, 1000)
        )
        self.assertEqual(lines, ["Jane Doe", "", "1 Main St"])

    def test_wrap_text_to_width_breaks_long_word(self) -> None:
        lines = list(wrap_text_to_width("ab WWWWWWWWWW", "Helvetica", 12, 40))
        self.assertEqual(lines[0], "ab")
        self.assertEqual("".join(lines[1:]), "WWWWWWWWWW")
        for line in lines:
            self.assertLessEqual(stringWidth(line, "Helvetica", 12), 40)

    def test_align_offset(self) -> None:
        self.assertEqual(align_offset(100, 40, "left"), 0)
        self.assertEqual(align_offset(100, 40, "center"), 30)
        self.assertEqual(align_offset(100, 40, "right"), 60)
        self.assertEqual(align_offset(100, 40, "C"), 30)

    def test_align_parse(self) -> None:
        self.assertIs(Align.parse("R"), Align.RIGHT)
        self.assertIs(Align.parse(Align.LEFT), Align.LEFT)
        with self.assertRaises(ValueError):
            Align.parse("justify")


if __name__ == "__main__":
    unittest.main()
