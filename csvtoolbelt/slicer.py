"""Return a half-open range of records from CSV data."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .csvio import read_rows, write_rows


def compute_range(
    start: int | None = None,
    end: int | None = None,
    length: int | None = None,
    index: int | None = None,
    total: int = 0,
) -> tuple[int, int]:
    """Work out the half-open record range (start, end).

    A negative start counts back from the last of total records.
    """
    for name, value in (("--end", end), ("--len", length), ("--index", index)):
        if value is not None and value < 0:
            raise ValueError(f"{name} must not be negative")
    if start is not None and start < 0:
        if -start > total:
            raise ValueError(
                f"--start {start} reaches before the first of {total} records"
            )
        start = total + start

    if index is not None:
        if start is not None or end is not None or length is not None:
            raise ValueError("--index cannot be used with --start, --end or --len")
        return index, index + 1
    if end is not None and length is not None:
        raise ValueError("--end and --len cannot be used at the same time.")

    begin = start or 0
    if end is not None:
        if begin > end:
            raise ValueError(
                f"The end of the range ({end}) must be greater than or equal "
                f"to the start of the range ({begin})."
            )
        return begin, end
    if length is not None:
        return begin, begin + length
    return begin, max(begin, total)


def slice_rows(
    rows: Sequence[Sequence[str]],
    start: int | None = None,
    end: int | None = None,
    length: int | None = None,
    index: int | None = None,
    no_headers: bool = False,
) -> list[list[str]]:
    """Return the header (if any) followed by the records in the range."""
    records = rows if no_headers else rows[1:]
    begin, stop = compute_range(start, end, length, index, len(records))
    out: list[list[str]] = [] if no_headers or not rows else [list(rows[0])]
    out.extend(list(r) for r in records[begin:stop])
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="slice", description="Slice records from CSV data.")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-s", "--start", type=int)
    parser.add_argument("-e", "--end", type=int)
    parser.add_argument("-l", "--len", dest="length", type=int)
    parser.add_argument("-i", "--index", type=int)
    parser.add_argument("-o", "--output")
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    rows = read_rows(args.input, args.delimiter)
    result = slice_rows(
        rows,
        start=args.start,
        end=args.end,
        length=args.length,
        index=args.index,
        no_headers=args.no_headers,
    )
    write_rows(result, args.output)
    return 0