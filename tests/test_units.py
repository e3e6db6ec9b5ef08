import unittest

from label_sheets import Unit, UnsupportedFontSizeError, convert, line_height_for
from label_sheets.units import LINE_HEIGHTS_MM


class ConvertTests(unittest.TestCase):
    def test_identity(self) -> None:
        self.assertEqual(convert(12.5, "mm", "mm"), 12.5)
        self.assertEqual(convert(1.5, Unit.INCH, "in"), 1.5)

    def test_mm_to_inch(self) -> None:
        self.assertAlmostEqual(convert(25.4, "mm", "in"), 1.0, places=6)
        self.assertAlmostEqual(convert(1.0, Unit.INCH, Unit.MM), 25.4, places=4)

    def test_round_trip(self) -> None:
        for value in (0.0, 0.148, 3.0, 66.675, 215.9, 1234.5):
            there = convert(value, Unit.MM, Unit.INCH)
            self.assertAlmostEqual(convert(there, Unit.INCH, Unit.MM), value)
            back = convert(value, Unit.INCH, Unit.MM)
            self.assertAlmostEqual(convert(back, Unit.MM, Unit.INCH), value)

    def test_unsupported_unit_fails_fast(self) -> None:
        with self.assertRaises(ValueError):
            convert(1.0, "cm", "mm")
        with self.assertRaises(ValueError):
            convert(1.0, "mm", "pt")


class LineHeightTests(unittest.TestCase):
    def test_table_values_in_mm(self) -> None:
        expected = [2, 2.5, 3, 4, 5, 6, 7, 8, 9, 10]
        for size, height in zip(range(6, 16), expected):
            self.assertAlmostEqual(line_height_for(size), height)
        self.assertEqual(sorted(LINE_HEIGHTS_MM), list(range(6, 16)))

    def test_table_values_in_inches(self) -> None:
        for size, height in LINE_HEIGHTS_MM.items():
            self.assertAlmostEqual(
                line_height_for(size, "in"),
                height * 39.37008 / 1000,
            )

    def test_integral_float_is_accepted(self) -> None:
        self.assertAlmostEqual(line_height_for(8.0), 3.0)

    def test_sizes_outside_table(self) -> None:
        for size in (0, 5, 16, 72, 8.5):
            with self.assertRaises(UnsupportedFontSizeError):
                line_height_for(size)

    def test_non_finite_sizes(self) -> None:
        for size in (float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(UnsupportedFontSizeError):
                line_height_for(size)

    def test_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            line_height_for(4)


if __name__ == "__main__":
    unittest.main()
