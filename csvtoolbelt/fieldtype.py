"""Column type inference and typed running aggregates for CSV statistics."""

from __future__ import annotations

import enum
import math
import warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from dateutil import parser as _date_parser

from .sort import _parse_number

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_DEFAULT_A = datetime(2000, 1, 1, 0, 0, 0)
_DEFAULT_B = datetime(2000, 1, 1, 1, 1, 1)


def _as_text(sample: str | bytes) -> str:
    if isinstance(sample, bytes):
        return sample.decode("utf-8", errors="replace")
    return sample


def _parse_date(text: str, default: datetime = _DEFAULT_A) -> datetime | None:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            return _date_parser.parse(text, default=default)
        except (ValueError, OverflowError, TypeError):
            return None


def _has_time(text: str) -> bool:
    first = _parse_date(text, _DEFAULT_A)
    second = _parse_date(text, _DEFAULT_B)
    return first is not None and second is not None and first.hour == second.hour


def _date_key(text: str) -> str:
    parsed = _parse_date(text)
    if parsed is None:
        raise ValueError(f"not a date: {text!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    else:
        parsed = parsed.astimezone(timezone.utc)
    rendered = parsed.strftime("%Y-%m-%d %H:%M:%S")
    micros = parsed.microsecond
    if micros:
        if micros % 1000 == 0:
            rendered += f".{micros // 1000:03d}"
        else:
            rendered += f".{micros:06d}"
    return rendered + " UTC"


def _number(text: str) -> int | float:
    value = _parse_number(text)
    if value is None:
        raise ValueError(f"not a number: {text!r}")
    return value


def _integer(text: str) -> int:
    value = _number(text)
    if not isinstance(value, int):
        raise ValueError(f"not an integer: {text!r}")
    return value


def _truncate(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I64_MAX if value > 0 else _I64_MIN
    return max(_I64_MIN, min(_I64_MAX, int(value)))


def _format_float(value: float) -> str:
    """Render a float in plain decimal notation with the shortest digits."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        text = str(int(value))
        return "-0" if text == "0" and math.copysign(1.0, value) < 0 else text
    return format(Decimal(repr(value)), "f")


class FieldType(enum.Enum):
    """Inferred type of a column, from most to least specific."""

    UNKNOWN = "Unknown"
    NULL = "NULL"
    STRING = "String"
    FLOAT = "Float"
    INTEGER = "Integer"
    DATE = "Date"
    DATETIME = "DateTime"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_sample(cls, sample: str | bytes, dates: bool = False) -> FieldType:
        """Infer the type of a single field value."""
        if not sample:
            return cls.NULL
        if isinstance(sample, bytes):
            try:
                text = sample.decode("utf-8")
            except UnicodeDecodeError:
                return cls.UNKNOWN
        else:
            text = sample
        number = _parse_number(text)
        if isinstance(number, int):
            return cls.INTEGER
        if number is not None:
            return cls.FLOAT
        if dates and _parse_date(text) is not None:
            return cls.DATETIME if _has_time(text) else cls.DATE
        return cls.STRING

    def merge(self, other: FieldType) -> FieldType:
        """Return the type that covers both self and other."""
        if self is other:
            return self
        if self is FieldType.NULL:
            return other
        if other is FieldType.NULL:
            return self
        pair = {self, other}
        if FieldType.UNKNOWN in pair:
            return FieldType.UNKNOWN
        if pair == {FieldType.DATE, FieldType.DATETIME}:
            return FieldType.DATETIME
        if FieldType.STRING in pair:
            return FieldType.STRING
        if FieldType.FLOAT in pair:
            return FieldType.FLOAT
        return FieldType.INTEGER

    def is_number(self) -> bool:
        return self in (FieldType.FLOAT, FieldType.INTEGER)

    def is_null(self) -> bool:
        return self is FieldType.NULL


@dataclass
class TypedSum:
    """Running sum: integers until a float is seen, then floats."""

    integer: int = 0
    float: float | None = None

    def add(self, typ: FieldType, sample: str | bytes) -> None:
        text = _as_text(sample)
        if not text:
            return
        if typ is FieldType.FLOAT:
            value = float(_number(text))
            if self.float is None:
                self.float = self.integer + value
            else:
                self.float += value
        elif typ is FieldType.INTEGER:
            if self.float is not None:
                self.float += float(_number(text))
            else:
                self.integer += _integer(text)

    def show(self, typ: FieldType) -> str | None:
        if typ is FieldType.INTEGER:
            return str(self.integer)
        if typ is FieldType.FLOAT:
            return _format_float(self.float if self.float is not None else 0.0)
        return None

    def merge(self, other: TypedSum) -> None:
        if self.float is not None and other.float is not None:
            self.float += other.float
        elif self.float is not None:
            self.float += other.integer
        elif other.float is not None:
            self.float = self.integer + other.float
        else:
            self.integer += other.integer


@dataclass
class _MinMax:
    min: Any = None
    max: Any = None

    def add(self, value: Any) -> None:
        if self.min is None or value < self.min:
            self.min = value
        if self.max is None or value > self.max:
            self.max = value

    def merge(self, other: _MinMax) -> None:
        for value in (other.min, other.max):
            if value is not None:
                self.add(value)

    def pair(self) -> tuple[Any, Any] | None:
        if self.min is None or self.max is None:
            return None
        return self.min, self.max


@dataclass
class TypedMinMax:
    """Minimum and maximum values for every type where they make sense."""

    strings: _MinMax = field(default_factory=_MinMax)
    str_len: _MinMax = field(default_factory=_MinMax)
    integers: _MinMax = field(default_factory=_MinMax)
    floats: _MinMax = field(default_factory=_MinMax)
    dates: _MinMax = field(default_factory=_MinMax)

    def add(self, typ: FieldType, sample: str | bytes) -> None:
        text = _as_text(sample)
        self.str_len.add(len(text.encode("utf-8")))
        if not text:
            return
        self.strings.add(text)
        if typ is FieldType.FLOAT:
            value = float(_number(text))
            self.floats.add(value)
            self.integers.add(_truncate(value))
        elif typ is FieldType.INTEGER:
            number = _integer(text)
            self.integers.add(number)
            self.floats.add(float(number))
        elif typ in (FieldType.DATE, FieldType.DATETIME):
            self.dates.add(_date_key(text))

    def len_range(self) -> tuple[str, str] | None:
        bounds = self.str_len.pair()
        if bounds is None:
            return None
        return str(bounds[0]), str(bounds[1])

    def show(self, typ: FieldType) -> tuple[str, str] | None:
        if typ is FieldType.NULL:
            return None
        if typ in (FieldType.STRING, FieldType.UNKNOWN):
            return self.strings.pair()
        if typ in (FieldType.DATE, FieldType.DATETIME):
            return self.dates.pair()
        if typ is FieldType.INTEGER:
            bounds = self.integers.pair()
            return None if bounds is None else (str(bounds[0]), str(bounds[1]))
        bounds = self.floats.pair()
        return None if bounds is None else (_format_float(bounds[0]), _format_float(bounds[1]))

    def merge(self, other: TypedMinMax) -> None:
        self.strings.merge(other.strings)
        self.str_len.merge(other.str_len)
        self.integers.merge(other.integers)
        self.floats.merge(other.floats)
        self.dates.merge(other.dates)