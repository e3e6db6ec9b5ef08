"""Shared helpers for text placement."""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable, List

from reportlab.pdfbase.pdfmetrics import stringWidth


class Align(StrEnum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: str | Align) -> Align:
        """Accept ``left``/``center``/``right`` or ``L``/``C``/``R``."""

        key = str(value).strip().lower()
        for align in cls:
            if key in (align.value, align.value[0]):
                return align
        raise ValueError(
            f"Unknown alignment '{value}'. Expected left, center or right."
        )


def align_offset(
    available_width: float,
    content_width: float,
    align: str | Align,
) -> float:
    """Return the x offset of ``content_width`` inside ``available_width``."""

    align = Align.parse(align)
    if align is Align.CENTER:
        return (available_width - content_width) / 2.0
    if align is Align.RIGHT:
        return available_width - content_width
    return 0.0


def wrap_text_to_width(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
) -> Iterable[str]:
    """Wrap text into lines that fit within the specified width.

    Explicit newlines always start a new line; blank lines are kept.
    """

    if not text or max_width_pt <= 0:
        return []

    lines: List[str] = []
    for paragraph in text.splitlines():
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        lines.extend(
            _wrap_words(words, font_name, font_size, max_width_pt)
        )
    return lines


def _wrap_words(
    words: List[str],
    font_name: str,
    font_size: float,
    max_width_pt: float,
) -> List[str]:
    lines: List[str] = []
    current: List[str] = []
    for word in words:
        tentative = " ".join(current + [word]) if current else word
        if stringWidth(tentative, font_name, font_size) <= max_width_pt:
            current.append(word)
            continue

        if current:
            lines.append(" ".join(current))
            current = []
            if stringWidth(word, font_name, font_size) <= max_width_pt:
                current = [word]
                continue

        # single word exceeds width; perform character-level wrap
        partial = ""
        for ch in word:
            candidate = partial + ch
            if stringWidth(candidate, font_name, font_size) > max_width_pt:
                if partial:
                    lines.append(partial)
                partial = ch
            else:
                partial = candidate
        if partial:
            current = [partial]

    if current:
        lines.append(" ".join(current))
    return lines
