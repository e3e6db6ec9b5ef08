import unittest

from label_sheets import ErrorCorrection, Matrix, QrCodeGenerator


class ErrorCorrectionTests(unittest.TestCase):
    def test_parse_names_and_codes(self) -> None:
        self.assertIs(ErrorCorrection.parse("low"), ErrorCorrection.LOW)
        self.assertIs(ErrorCorrection.parse("M"), ErrorCorrection.MEDIUM)
        self.assertIs(ErrorCorrection.parse("q"), ErrorCorrection.QUARTILE)
        self.assertIs(ErrorCorrection.parse("HIGH"), ErrorCorrection.HIGH)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            ErrorCorrection.parse("ultra")


class MatrixTests(unittest.TestCase):
    def test_from_rows(self) -> None:
        matrix = Matrix.from_rows([[1, 0, 1], [0, 0, 1]])
        self.assertEqual((matrix.rows, matrix.columns), (2, 3))
        self.assertEqual(matrix.modules[0], (True, False, True))
        self.assertFalse(matrix.is_empty)

    def test_empty(self) -> None:
        self.assertTrue(Matrix.empty().is_empty)
        self.assertTrue(Matrix.from_rows([]).is_empty)
        self.assertTrue(Matrix.from_rows([[]]).is_empty)


class QrCodeGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.generator = QrCodeGenerator()

    def test_version_one_has_no_quiet_zone(self) -> None:
        matrix = self.generator.generate("hello")
        self.assertEqual((matrix.rows, matrix.columns), (21, 21))
        # finder pattern corners
        self.assertTrue(matrix.modules[0][0])
        self.assertTrue(matrix.modules[0][20])
        self.assertTrue(matrix.modules[20][0])

    def test_higher_level_needs_more_modules(self) -> None:
        text = "https://example.com/items/0123456789"
        low = self.generator.generate(text, ErrorCorrection.LOW)
        high = self.generator.generate(text, ErrorCorrection.HIGH)
        self.assertGreater(high.rows, low.rows)

    def test_empty_text(self) -> None:
        self.assertTrue(self.generator.generate("").is_empty)

    def test_overflow_returns_empty_matrix(self) -> None:
        self.assertTrue(self.generator.generate("x" * 5000).is_empty)


if __name__ == "__main__":
    unittest.main()
