"""Sort CSV rows lexicographically, numerically or randomly."""

from __future__ import annotations

import argparse
import random as _random
import re
from collections.abc import Iterable, Iterator, Sequence
from functools import cmp_to_key

from .csvio import read_rows, write_rows
from .selection import resolve_selection

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def _parse_number(text: str) -> int | float | None:
    if _INT_RE.fullmatch(text):
        value = int(text)
        if _I64_MIN <= value <= _I64_MAX:
            return value
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    return None


def _next_number(fields: Iterator[str]) -> int | float | None:
    value = next(fields, None)
    return None if value is None else _parse_number(value)


def _compare_number(x: int | float, y: int | float) -> int:
    if isinstance(x, int) and isinstance(y, int):
        return (x > y) - (x < y)
    fx, fy = float(x), float(y)
    if fx < fy:
        return -1
    if fx > fy:
        return 1
    return 0


def compare_fields(a: Iterable[str], b: Iterable[str]) -> int:
    """Compare two field sequences lexicographically; returns -1, 0 or 1."""
    left, right = list(a), list(b)
    return (left > right) - (left < right)


def compare_numeric(a: Iterable[str], b: Iterable[str]) -> int:
    """Compare field sequences as numbers.

    Comparison stops at the first field of either side that is missing or is
    not a number; such a side orders first. NaN compares equal to anything.
    """
    left, right = iter(a), iter(b)
    while True:
        x = _next_number(left)
        y = _next_number(right)
        if x is None and y is None:
            return 0
        if x is None:
            return -1
        if y is None:
            return 1
        result = _compare_number(x, y)
        if result:
            return result


def sort_rows(
    rows: Sequence[Sequence[str]],
    select: str = "",
    no_headers: bool = False,
    numeric: bool = False,
    reverse: bool = False,
    random: bool = False,
    seed: int | None = None,
    uniq: bool = False,
) -> list[list[str]]:
    """Return the header (if any) followed by the sorted records."""
    if not rows:
        return []
    header = list(rows[0])
    sel = resolve_selection(select, header, no_headers)
    records = [list(r) for r in (rows if no_headers else rows[1:])]

    if random:
        _random.Random(seed).shuffle(records)
    else:
        compare = compare_numeric if numeric else compare_fields
        records.sort(
            key=cmp_to_key(lambda r1, r2: compare(sel.select(r1), sel.select(r2))),
            reverse=reverse,
        )

    out: list[list[str]] = [] if no_headers else [header]
    prev: list[str] | None = None
    for record in records:
        duplicate = (
            uniq
            and prev is not None
            and compare_fields(sel.select(record), sel.select(prev)) == 0
        )
        if not duplicate:
            out.append(record)
        prev = record
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sort", description="Sort CSV data.")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-s", "--select", default="")
    parser.add_argument("-N", "--numeric", action="store_true")
    parser.add_argument("-R", "--reverse", action="store_true")
    parser.add_argument("--random", action="store_true")
    parser.add_argument("--seed", type=int)
    parser.add_argument("-o", "--output")
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    parser.add_argument("-u", "--uniq", action="store_true")
    args = parser.parse_args(argv)
    rows = read_rows(args.input, args.delimiter)
    result = sort_rows(
        rows,
        select=args.select,
        no_headers=args.no_headers,
        numeric=args.numeric,
        reverse=args.reverse,
        random=args.random,
        seed=args.seed,
        uniq=args.uniq,
    )
    write_rows(result, args.output)
    return 0