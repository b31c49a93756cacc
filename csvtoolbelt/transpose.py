"""Transpose the rows and columns of CSV data."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .csvio import read_rows, write_rows


def transpose(rows: Sequence[Sequence[str]]) -> list[list[str]]:
    """Swap rows and columns; every row must be as long as the first."""
    if not rows:
        return []
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("all rows must have the same number of fields")
    return [list(column) for column in zip(*rows)]


def _multipass(path: str, delimiter: str) -> list[list[str]]:
    first = read_rows(path, delimiter)
    ncols = len(first[0]) if first else 0
    out = []
    for i in range(ncols):
        rows = read_rows(path, delimiter)
        try:
            out.append([row[i] for row in rows])
        except IndexError:
            raise ValueError("all rows must have the same number of fields") from None
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="transpose", description="Transpose CSV data.")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-m", "--multipass", action="store_true")
    parser.add_argument("-o", "--output")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    from_stdin = args.input is None or args.input == "-"
    if args.multipass and not from_stdin:
        result = _multipass(args.input, args.delimiter)
    else:
        result = transpose(read_rows(args.input, args.delimiter))
    write_rows(result, args.output)
    return 0