"""Matrix-code generation for label stamps."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence

import qrcode
from qrcode.exceptions import DataOverflowError


class ErrorCorrection(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    QUARTILE = "quartile"
    HIGH = "high"

    @classmethod
    def parse(cls, value: str | ErrorCorrection) -> ErrorCorrection:
        """Accept the full level name or its single-letter code."""

        key = str(value).strip().lower()
        for level in cls:
            if key in (level.value, level.value[0]):
                return level
        raise ValueError(
            f"Unknown error correction level '{value}'. "
            f"Expected one of: {', '.join(m.value for m in cls)}"
        )


_QR_LEVELS = {
    ErrorCorrection.LOW: qrcode.constants.ERROR_CORRECT_L,
    ErrorCorrection.MEDIUM: qrcode.constants.ERROR_CORRECT_M,
    ErrorCorrection.QUARTILE: qrcode.constants.ERROR_CORRECT_Q,
    ErrorCorrection.HIGH: qrcode.constants.ERROR_CORRECT_H,
}


@dataclass(frozen=True)
class Matrix:
    """Rectangular grid of filled (``True``) and empty modules."""

    rows: int
    columns: int
    modules: tuple[tuple[bool, ...], ...]

    @classmethod
    def empty(cls) -> Matrix:
        return cls(rows=0, columns=0, modules=())

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[object]]) -> Matrix:
        modules = tuple(tuple(bool(cell) for cell in row) for row in rows)
        columns = len(modules[0]) if modules else 0
        return cls(rows=len(modules), columns=columns, modules=modules)

    @property
    def is_empty(self) -> bool:
        return self.rows == 0 or self.columns == 0


class MatrixGenerator(ABC):
    """Turns text into a module matrix."""

    @abstractmethod
    def generate(
        self,
        text: str,
        level: ErrorCorrection = ErrorCorrection.LOW,
    ) -> Matrix:
        """Return the module matrix for ``text``; empty on failure."""


class QrCodeGenerator(MatrixGenerator):
    """QR code matrices without a quiet zone."""

    def generate(
        self,
        text: str,
        level: ErrorCorrection = ErrorCorrection.LOW,
    ) -> Matrix:
        if not text:
            return Matrix.empty()

        qr = qrcode.QRCode(
            border=0,
            error_correction=_QR_LEVELS[ErrorCorrection.parse(level)],
        )
        qr.add_data(text)
        try:
            qr.make(fit=True)
        except DataOverflowError:
            return Matrix.empty()
        return Matrix.from_rows(qr.get_matrix())
