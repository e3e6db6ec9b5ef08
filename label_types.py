from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LabelContent:
    """Payload to place into one label cell."""

    text: str
    overlay: str = ""
    overlay_align: str = "right"
    qr: str = ""
    qr_align: str = "right"
    qr_offset: float = 0.0
    vertical: str = ""
    vertical_x: float = -5.0
    vertical_y: float = 0.0
    vertical_direction: str = "down"

    @classmethod
    def from_row(cls, row: dict[str, str]) -> LabelContent:
        """Build content from a CSV row; blank cells keep the defaults."""

        text = (row.get("text") or "").replace("\\n", "\n")
        values: dict[str, object] = {}
        for key in ("overlay", "overlay_align", "qr", "qr_align",
                    "vertical", "vertical_direction"):
            value = (row.get(key) or "").strip()
            if value:
                values[key] = value.replace("\\n", "\n")
        for key in ("qr_offset", "vertical_x", "vertical_y"):
            value = (row.get(key) or "").strip()
            if value:
                try:
                    values[key] = float(value)
                except ValueError as exc:
                    raise ValueError(
                        f"Column '{key}' must be a number, got '{value}'."
                    ) from exc
        return cls(text=text, **values)  # type: ignore[arg-type]
