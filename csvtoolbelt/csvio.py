"""Reading and writing CSV rows from files or standard streams."""

from __future__ import annotations

import csv
import sys
from collections.abc import Iterable, Sequence
from contextlib import contextmanager
from typing import Iterator, TextIO


def _check_delimiter(delimiter: str) -> str:
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    return delimiter


@contextmanager
def _open_input(path: str | None) -> Iterator[TextIO]:
    if path is None or path == "-":
        yield sys.stdin
    else:
        with open(path, newline="", encoding="utf-8") as handle:
            yield handle


@contextmanager
def _open_output(path: str | None) -> Iterator[TextIO]:
    if path is None or path == "-":
        yield sys.stdout
        sys.stdout.flush()
    else:
        with open(path, "w", newline="", encoding="utf-8") as handle:
            yield handle


def read_rows(path: str | None = None, delimiter: str = ",") -> list[list[str]]:
    """Read every row of a CSV file, or of stdin when path is None or '-'."""
    with _open_input(path) as handle:
        return [list(row) for row in csv.reader(handle, delimiter=_check_delimiter(delimiter))]


def write_rows(
    rows: Iterable[Sequence[str]], path: str | None = None, delimiter: str = ","
) -> None:
    """Write rows as CSV to a file, or to stdout when path is None or '-'."""
    with _open_output(path) as handle:
        writer = csv.writer(handle, delimiter=_check_delimiter(delimiter), lineterminator="\n")
        writer.writerows(rows)