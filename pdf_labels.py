#!/usr/bin/env python3
"""Generate PDF label sheets from a CSV file."""

import argparse
import csv
import io
import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from dotenv import load_dotenv

from fonts import register_font
from label_generation import render, render_preview
from label_sheets import LabelSheetError, Unit, get_format, list_formats
from label_types import LabelContent


def read_labels(handle: TextIO) -> List[LabelContent]:
    """Read label payloads from CSV with a ``text`` column."""

    reader = csv.DictReader(handle)
    if not reader.fieldnames or "text" not in reader.fieldnames:
        raise SystemExit("Input CSV must have a 'text' column.")
    try:
        return [LabelContent.from_row(row) for row in reader]
    except ValueError as exc:
        raise SystemExit(f"Invalid input row {reader.line_num}: {exc}") from exc


def _load_labels(path: str) -> List[LabelContent]:
    if path == "-":
        return read_labels(sys.stdin)
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            return read_labels(handle)
    except OSError as exc:
        raise SystemExit(f"Cannot read input '{path}': {exc}") from exc


def format_listing() -> str:
    """Describe every built-in format, one per line."""

    out = io.StringIO()
    for name in list_formats():
        fmt = get_format(name)
        out.write(
            f"{name:<6} {fmt.paper_size:<6} {fmt.columns}x{fmt.rows} "
            f"{fmt.width}x{fmt.height} {fmt.metric}\n"
        )
    return out.getvalue()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for generating a label sheet PDF."""

    parser = argparse.ArgumentParser(
        description="CSV rows -> label sheet PDF (Avery and custom formats)"
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="CSV file with a 'text' column ('-' reads stdin).",
    )
    parser.add_argument("-o", "--output")
    parser.add_argument(
        "-f", "--format",
        default=os.getenv("PDF_LABELS_FORMAT", "5160"),
        help=(
            "Label format identifier (defaults to PDF_LABELS_FORMAT from the "
            "environment/.env, else 5160)."
        ),
    )
    parser.add_argument(
        "-u", "--unit",
        default=os.getenv("PDF_LABELS_UNIT", Unit.MM.value),
        choices=[u.value for u in Unit],
        help="Document unit (defaults to PDF_LABELS_UNIT, else mm).",
    )
    parser.add_argument(
        "--start-column",
        type=int,
        default=1,
        help="Column of the first label on a partially used sheet (1-based).",
    )
    parser.add_argument(
        "--start-row",
        type=int,
        default=1,
        help="Row of the first label on a partially used sheet (1-based).",
    )
    parser.add_argument(
        "--font-size",
        type=int,
        help="Font size in points (6-15, default: the format's size).",
    )
    parser.add_argument(
        "--font",
        help="TrueType font file for unicode text (default: Helvetica).",
    )
    parser.add_argument(
        "-d", "--draw-outline",
        action="store_true",
        help="Draw outline around every label",
    )
    parser.add_argument(
        "--preview",
        metavar="PNG",
        help="Also write a PNG preview of the first page.",
    )
    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="List built-in label formats and exit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_formats:
        print(format_listing(), end="")
        return 0

    if not args.input:
        parser.error("an input CSV is required")

    labels = _load_labels(args.input)
    output = args.output or "labels.pdf"

    font_name = "Helvetica"
    if args.font:
        try:
            font_name = register_font(args.font)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot load font '{args.font}': {exc}") from exc

    try:
        message = render(
            output,
            labels,
            args.format,
            unit=args.unit,
            start_column=args.start_column,
            start_row=args.start_row,
            font_name=font_name,
            font_size=args.font_size,
            draw_outline=args.draw_outline,
        )
    except (LabelSheetError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    if args.preview and labels:
        try:
            png = render_preview(output)
            with open(args.preview, "wb") as handle:
                handle.write(png)
        except (OSError, ValueError, RuntimeError) as exc:
            raise SystemExit(f"Cannot write preview '{args.preview}': {exc}") from exc

    print(message)
    return 0


def run() -> None:
    load_dotenv()
    sys.exit(main())


if __name__ == "__main__":
    run()
