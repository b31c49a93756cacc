"""Render CSV data as an aligned text table."""

from __future__ import annotations

import argparse
import enum
from collections.abc import Sequence

from .csvio import read_rows


class Align(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


def condense(value: str, limit: int | None) -> str:
    """Truncate value to limit characters, marking the cut with '...'."""
    if limit is None or len(value) <= limit:
        return value
    return value[:limit] + "..."


def _pad(text: str, width: int, align: Align) -> str:
    gap = width - len(text)
    if align is Align.RIGHT:
        return " " * gap + text
    if align is Align.CENTER:
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def format_table(
    rows: Sequence[Sequence[str]],
    width: int = 2,
    pad: int = 2,
    align: Align | str = Align.LEFT,
    limit: int | None = None,
) -> str:
    """Format rows so that columns line up; the last cell of a line is not padded."""
    align = Align(align)
    cells = [[condense(v, limit) for v in row] for row in rows]
    widths: dict[int, int] = {}
    for row in cells:
        for i, value in enumerate(row[:-1]):
            widths[i] = max(widths.get(i, width), len(value) + pad)
    lines = []
    for row in cells:
        parts = [_pad(v, widths[i], align) for i, v in enumerate(row[:-1])]
        if row:
            parts.append(row[-1])
        lines.append("".join(parts))
    return "".join(line + "\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="table", description="Align CSV data as a table.")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-w", "--width", type=int, default=2)
    parser.add_argument("-p", "--pad", type=int, default=2)
    parser.add_argument("-a", "--align", choices=[a.value for a in Align], default="left")
    parser.add_argument("-c", "--condense", type=int)
    parser.add_argument("-o", "--output")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    text = format_table(
        read_rows(args.input, args.delimiter), args.width, args.pad, args.align, args.condense
    )
    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(text)
    else:
        print(text, end="")
    return 0