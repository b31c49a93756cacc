"""Filter CSV rows by a set of regexes applied in one pass."""

from __future__ import annotations

import argparse
import os
import re
from collections.abc import Sequence

from .csvio import read_rows, write_rows
from .search import UNICODE_ENV, _flags
from .selection import resolve_selection


def read_regexset(path: str) -> list[str]:
    """Read one regex per line from a file."""
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read().splitlines()
    except OSError as exc:
        raise FileNotFoundError("Cannot open regexset file.") from exc


def searchset(
    rows: Sequence[Sequence[str]],
    regexes: Sequence[str],
    select: str = "",
    no_headers: bool = False,
    ignore_case: bool = False,
    invert_match: bool = False,
    unicode: bool = False,
    flag: str | None = None,
) -> list[list[str]]:
    """Return the header (if any) and rows where any regex matches a selected field."""
    flags = _flags(ignore_case, unicode)
    patterns = [re.compile(r, flags) for r in regexes]
    if not rows:
        return []
    headers = list(rows[0])
    sel = resolve_selection(select, headers, no_headers)
    if flag is not None:
        headers.append(flag)
    out: list[list[str]] = [] if no_headers else [headers]
    records = rows if no_headers else rows[1:]
    match_list = ""
    for rowi, record in enumerate(records, start=2):
        matched = False
        for value in sel.select(record):
            hits = [n for n, p in enumerate(patterns, start=1) if p.search(value)]
            if hits:
                matched = True
                match_list = "[" + ", ".join(map(str, hits)) + "]"
                break
        if invert_match:
            matched = not matched
        if flag is not None:
            if not matched:
                value = "0"
            elif invert_match:
                value = str(rowi)
            else:
                value = f"{rowi};{match_list}"
            out.append([*record, value])
        elif matched:
            out.append(list(record))
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="searchset", description="Filter CSV rows by a regex set.")
    parser.add_argument("regexset_file")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-i", "--ignore-case", action="store_true")
    parser.add_argument("-s", "--select", default="")
    parser.add_argument("-v", "--invert-match", action="store_true")
    parser.add_argument("-u", "--unicode", action="store_true")
    parser.add_argument("-o", "--output")
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    parser.add_argument("-f", "--flag")
    args = parser.parse_args(argv)
    regexes = read_regexset(args.regexset_file)
    rows = read_rows(args.input, args.delimiter)
    result = searchset(
        rows,
        regexes,
        select=args.select,
        no_headers=args.no_headers,
        ignore_case=args.ignore_case,
        invert_match=args.invert_match,
        unicode=args.unicode or UNICODE_ENV in os.environ,
        flag=args.flag,
    )
    write_rows(result, args.output)
    return 0