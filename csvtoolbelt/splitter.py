"""Split CSV data into files of a fixed number of records."""

from __future__ import annotations

import argparse
import re
from collections.abc import Sequence
from pathlib import Path

from .csvio import read_rows, write_rows

_UNSAFE = re.compile(r"[^\w.\-]")


def render_filename(template: str, value: str) -> str:
    """Put a sanitized value in place of the single '{}' of template."""
    parts = template.split("{}")
    if len(parts) != 2:
        raise ValueError("The --filename argument must contain one '{}'.")
    prefix, suffix = parts
    return prefix + _UNSAFE.sub("_", value) + suffix


def split_csv(
    rows: Sequence[Sequence[str]],
    outdir: str | Path,
    size: int = 500,
    filename: str = "{}.csv",
    pad: int = 0,
    no_headers: bool = False,
) -> list[Path]:
    """Write chunks of size records into outdir; return the files written.

    Each file is named after the zero-based index of its first record,
    left-padded with zeros to pad digits. Unless no_headers is set, every
    chunk starts with the header row.
    """
    if size <= 0:
        raise ValueError("--size must be greater than 0.")
    render_filename(filename, "")
    directory = Path(outdir)
    directory.mkdir(parents=True, exist_ok=True)

    header = None if no_headers or not rows else list(rows[0])
    records = rows if no_headers else rows[1:]
    starts = range(0, len(records), size) or range(1)

    written = []
    for start in starts:
        path = directory / render_filename(filename, str(start).rjust(pad, "0"))
        chunk = [list(r) for r in records[start : start + size]]
        write_rows(([header] if header is not None else []) + chunk, str(path))
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="split", description="Split CSV data into chunks.")
    parser.add_argument("outdir")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-s", "--size", type=int, default=500)
    parser.add_argument("--filename", default="{}.csv")
    parser.add_argument("--pad", type=int, default=0)
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    rows = read_rows(args.input, args.delimiter)
    split_csv(rows, args.outdir, args.size, args.filename, args.pad, args.no_headers)
    return 0