"""Compute summary statistics for every column of CSV data."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .csvio import read_rows, write_rows
from .fieldtype import FieldType, TypedMinMax, TypedSum, _as_text, _format_float, _number
from .selection import resolve_selection


@dataclass(frozen=True)
class WhichStats:
    """Which statistics to gather for a column."""

    include_nulls: bool = False
    sum: bool = True
    range: bool = True
    dist: bool = True
    cardinality: bool = False
    nullcount: bool = False
    median: bool = False
    quartiles: bool = False
    mode: bool = False
    dates: bool = False


@dataclass
class _OnlineStats:
    """Streaming mean and population variance."""

    size: int = 0
    mean: float = 0.0
    q: float = 0.0

    def add(self, value: float) -> None:
        self.size += 1
        delta = value - self.mean
        self.mean += delta / self.size
        self.q += delta * (value - self.mean)

    def add_null(self) -> None:
        self.add(0.0)

    def variance(self) -> float:
        return self.q / self.size if self.size else math.nan

    def stddev(self) -> float:
        return math.sqrt(self.variance())

    def merge(self, other: _OnlineStats) -> None:
        if not other.size:
            return
        if not self.size:
            self.size, self.mean, self.q = other.size, other.mean, other.q
            return
        total = self.size + other.size
        delta = other.mean - self.mean
        self.q += other.q + delta * delta * self.size * other.size / total
        self.mean = (self.size * self.mean + other.size * other.mean) / total
        self.size = total


def _median(values: list[float]) -> float | None:
    data = sorted(values)
    n = len(data)
    if n == 0:
        return None
    if n % 2 == 0:
        return (data[n // 2 - 1] + data[n // 2]) / 2
    return data[n // 2]


def _quartiles(values: list[float]) -> tuple[float, float, float] | None:
    data = sorted(values)
    n = len(data)
    if n < 3:
        return None
    if n == 3:
        return data[0], data[1], data[2]
    r = n % 4
    k = (n - r) // 4
    if r == 0:
        return (
            (data[k - 1] + data[k]) / 2,
            (data[2 * k - 1] + data[2 * k]) / 2,
            (data[3 * k - 1] + data[3 * k]) / 2,
        )
    if r == 1:
        return (
            (data[k - 1] + data[k]) / 2,
            data[2 * k],
            (data[3 * k] + data[3 * k + 1]) / 2,
        )
    if r == 2:
        return data[k], (data[2 * k] + data[2 * k + 1]) / 2, data[3 * k + 1]
    return data[k], data[2 * k + 1], data[3 * k + 2]


def _modes(values: list[str]) -> list[str]:
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    highest = max(counts.values(), default=0)
    if highest <= 1:
        return []
    return sorted(v for v, c in counts.items() if c == highest)


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0 or math.isnan(denominator):
        if numerator == 0 or math.isnan(numerator) or math.isnan(denominator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


class Stats:
    """Running statistics of one column."""

    def __init__(self, which: WhichStats | None = None) -> None:
        self.which = which or WhichStats()
        self.typ = FieldType.NULL
        self.sum = TypedSum() if self.which.sum else None
        self.minmax = TypedMinMax() if self.which.range else None
        self.online = _OnlineStats() if self.which.dist else None
        self.modes: list[str] | None = (
            [] if self.which.mode or self.which.cardinality else None
        )
        self.median: list[float] | None = [] if self.which.median else None
        self.quartiles: list[float] | None = [] if self.which.quartiles else None
        self.nullcount = 0

    def add(self, sample: str | bytes) -> None:
        """Fold one field value into the statistics."""
        text = _as_text(sample)
        sample_type = FieldType.from_sample(sample, self.which.dates)
        self.typ = self.typ.merge(sample_type)
        typ = self.typ

        if self.sum is not None:
            self.sum.add(typ, text)
        if self.minmax is not None:
            self.minmax.add(typ, text)
        if self.modes is not None:
            self.modes.append(text)
        if sample_type.is_null():
            self.nullcount += 1

        if typ is FieldType.NULL or (typ.is_number() and sample_type.is_null()):
            if self.which.include_nulls and self.online is not None:
                self.online.add_null()
        elif typ.is_number():
            number = float(_number(text))
            if self.median is not None:
                self.median.append(number)
            if self.quartiles is not None:
                self.quartiles.append(number)
            if self.online is not None:
                self.online.add(number)

    def merge(self, other: Stats) -> None:
        """Combine the statistics of other into these."""
        if self.which != other.which:
            raise ValueError("cannot merge statistics gathered with different settings")
        self.typ = self.typ.merge(other.typ)
        if other.sum is not None:
            if self.sum is None:
                self.sum = other.sum
            else:
                self.sum.merge(other.sum)
        if other.minmax is not None:
            if self.minmax is None:
                self.minmax = other.minmax
            else:
                self.minmax.merge(other.minmax)
        if other.online is not None:
            if self.online is None:
                self.online = other.online
            else:
                self.online.merge(other.online)
        if other.modes is not None:
            self.modes = (self.modes or []) + other.modes
        if other.median is not None:
            self.median = (self.median or []) + other.median
        if other.quartiles is not None:
            self.quartiles = (self.quartiles or []) + other.quartiles
        self.nullcount += other.nullcount

    def to_record(self) -> list[str]:
        """Render the statistics in the column order of stat_headers."""
        typ = self.typ
        pieces: list[str] = [str(typ)]

        total = self.sum.show(typ) if self.sum is not None else None
        pieces.append(total if total is not None else "")

        bounds = self.minmax.show(typ) if self.minmax is not None else None
        pieces.extend(bounds if bounds is not None else ("", ""))

        lengths = self.minmax.len_range() if self.minmax is not None else None
        pieces.extend(lengths if lengths is not None else ("", ""))

        if typ.is_number() and self.online is not None:
            pieces.append(_format_float(self.online.mean))
            pieces.append(_format_float(self.online.stddev()))
            pieces.append(_format_float(self.online.variance()))
        else:
            pieces.extend(("", "", ""))

        median = (
            _median(self.median)
            if self.median is not None and typ.is_number()
            else None
        )
        if median is not None:
            pieces.append(_format_float(median))
        elif self.which.median:
            pieces.append("")

        quartiles = (
            _quartiles(self.quartiles)
            if self.quartiles is not None and typ.is_number()
            else None
        )
        if quartiles is not None:
            q1, q2, q3 = quartiles
            iqr = q3 - q1
            pieces.append(_format_float(q1 - 1.5 * iqr))
            pieces.append(_format_float(q1))
            pieces.append(_format_float(q2))
            pieces.append(_format_float(q3))
            pieces.append(_format_float(iqr))
            pieces.append(_format_float(q3 + 1.5 * iqr))
            if self.online is not None:
                skew = _divide(3.0 * (self.online.mean - q2), self.online.stddev())
                pieces.append(_format_float(skew))
            else:
                pieces.append("")
        elif self.which.quartiles:
            pieces.extend([""] * 7)

        if self.modes is None:
            if self.which.mode:
                pieces.append("")
            if self.which.cardinality:
                pieces.append("")
        else:
            if self.which.mode:
                pieces.append(",".join(_modes(self.modes)))
            if self.which.cardinality:
                pieces.append(str(len(set(self.modes))))

        if self.which.nullcount:
            pieces.append(str(self.nullcount))
        return pieces


def stat_headers(which: WhichStats) -> list[str]:
    """Return the header row of the statistics output."""
    fields = [
        "field",
        "type",
        "sum",
        "min",
        "max",
        "min_length",
        "max_length",
        "mean",
        "stddev",
        "variance",
    ]
    if which.median:
        fields.append("median")
    if which.quartiles:
        fields.extend(["lower_fence", "q1", "q2_median", "q3", "iqr", "upper_fence", "skew"])
    if which.mode:
        fields.append("mode")
    if which.cardinality:
        fields.append("cardinality")
    if which.nullcount:
        fields.append("nullcount")
    return fields


def compute_stats(
    rows: Sequence[Sequence[str]],
    select: str = "",
    no_headers: bool = False,
    which: WhichStats | None = None,
) -> tuple[list[str], list[Stats]]:
    """Gather statistics for the selected columns.

    Returns the field names (column positions when no_headers is set) and
    one Stats per selected column.
    """
    which = which or WhichStats()
    if not rows:
        return [], []
    sel = resolve_selection(select, rows[0], no_headers)
    names = [str(i) for i in range(len(sel))] if no_headers else sel.select(rows[0])
    stats = [Stats(which) for _ in sel]
    for row in rows if no_headers else rows[1:]:
        for stat, value in zip(stats, sel.select(row)):
            stat.add(value)
    return names, stats


def _which_from_args(args: argparse.Namespace) -> WhichStats:
    everything = args.everything
    return WhichStats(
        include_nulls=args.nulls,
        cardinality=args.cardinality or everything,
        nullcount=args.nullcount or everything,
        median=args.median and not args.quartiles and not everything,
        quartiles=args.quartiles or everything,
        mode=args.mode or everything,
        dates=args.dates,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="stats", description="Compute statistics on CSV data.")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-s", "--select", default="")
    parser.add_argument("--everything", action="store_true")
    parser.add_argument("--mode", action="store_true")
    parser.add_argument("--cardinality", action="store_true")
    parser.add_argument("--median", action="store_true")
    parser.add_argument("--nullcount", action="store_true")
    parser.add_argument("--quartiles", action="store_true")
    parser.add_argument("--nulls", action="store_true")
    parser.add_argument("--dates", action="store_true")
    parser.add_argument("-j", "--jobs", type=int, default=0)
    parser.add_argument("-o", "--output")
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    which = _which_from_args(args)
    rows = read_rows(args.input, args.delimiter)
    names, stats = compute_stats(rows, args.select, args.no_headers, which)
    out = [stat_headers(which)]
    out.extend([name, *stat.to_record()] for name, stat in zip(names, stats))
    write_rows(out, args.output)
    return 0