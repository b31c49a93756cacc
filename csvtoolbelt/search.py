"""Filter CSV rows by whether a regex matches any selected field."""

from __future__ import annotations

import argparse
import os
import re
from collections.abc import Sequence

from .csvio import read_rows, write_rows
from .selection import resolve_selection

UNICODE_ENV = "CSVTOOLBELT_REGEX_UNICODE"


def _flags(ignore_case: bool, unicode: bool) -> int:
    flags = 0 if unicode else re.ASCII
    if ignore_case:
        flags |= re.IGNORECASE
    return flags


def search(
    rows: Sequence[Sequence[str]],
    regex: str,
    select: str = "",
    no_headers: bool = False,
    ignore_case: bool = False,
    invert_match: bool = False,
    unicode: bool = False,
    flag: str | None = None,
) -> list[list[str]]:
    """Return the header (if any) and the rows whose selected fields match."""
    pattern = re.compile(regex, _flags(ignore_case, unicode))
    if not rows:
        return []
    headers = list(rows[0])
    sel = resolve_selection(select, headers, no_headers)
    if flag is not None:
        headers.append(flag)
    out: list[list[str]] = [] if no_headers else [headers]
    records = rows if no_headers else rows[1:]
    for rowi, record in enumerate(records, start=2):
        matched = any(pattern.search(f) for f in sel.select(record))
        if invert_match:
            matched = not matched
        if flag is not None:
            out.append([*record, str(rowi) if matched else "0"])
        elif matched:
            out.append(list(record))
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="search", description="Filter CSV rows by regex.")
    parser.add_argument("regex")
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
    rows = read_rows(args.input, args.delimiter)
    result = search(
        rows,
        args.regex,
        select=args.select,
        no_headers=args.no_headers,
        ignore_case=args.ignore_case,
        invert_match=args.invert_match,
        unicode=args.unicode or UNICODE_ENV in os.environ,
        flag=args.flag,
    )
    write_rows(result, args.output)
    return 0