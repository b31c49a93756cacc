"""Column selection: parse selector specs and pick columns from rows."""

from __future__ import annotations

import argparse
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .csvio import read_rows, write_rows


@dataclass(frozen=True)
class _Ref:
    name: str | None = None
    index: int | None = None
    nth: int = 0


@dataclass(frozen=True)
class _Range:
    start: _Ref | None
    end: _Ref | None


@dataclass(frozen=True)
class _Regex:
    pattern: str


@dataclass(frozen=True)
class _Spec:
    items: tuple = ()
    invert: bool = False


@dataclass(frozen=True)
class Selection:
    """Resolved zero-based column indices."""

    indices: tuple[int, ...] = field(default_factory=tuple)

    def select(self, row: Sequence[str]) -> list[str]:
        return [row[i] for i in self.indices]

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __getitem__(self, i: int) -> int:
        return self.indices[i]


def _split_tokens(spec: str) -> list[str]:
    tokens: list[str] = []
    buf = ""
    in_quote = False
    in_regex = False
    depth = 0
    i = 0
    while i < len(spec):
        ch = spec[i]
        if in_regex:
            buf += ch
            if ch == "/" and (i + 1 == len(spec) or spec[i + 1] == ","):
                in_regex = False
        elif in_quote:
            buf += ch
            if ch == '"':
                in_quote = False
        elif ch == "/" and buf == "":
            buf = ch
            in_regex = True
        elif ch == '"':
            buf += ch
            in_quote = True
        elif ch == "[":
            depth += 1
            buf += ch
        elif ch == "]":
            depth -= 1
            buf += ch
        elif ch == "," and depth == 0:
            tokens.append(buf)
            buf = ""
        else:
            buf += ch
        i += 1
    if in_quote or in_regex:
        raise ValueError(f"unterminated selector in {spec!r}")
    tokens.append(buf)
    return tokens


def _parse_ref(text: str) -> _Ref | None:
    if text == "":
        return None
    if text.startswith('"'):
        close = text.find('"', 1)
        if close < 0:
            raise ValueError(f"unterminated quoted name: {text!r}")
        name, rest, quoted = text[1:close], text[close + 1 :], True
    else:
        bracket = text.find("[")
        name, rest = (text, "") if bracket < 0 else (text[:bracket], text[bracket:])
        quoted = False
    nth = 0
    if rest:
        match = re.fullmatch(r"\[(\d+)\]", rest)
        if not match:
            raise ValueError(f"invalid selector: {text!r}")
        nth = int(match.group(1))
    if not quoted and name.isdigit():
        if nth:
            raise ValueError(f"index selector cannot be disambiguated: {text!r}")
        return _Ref(index=int(name))
    if name == "":
        raise ValueError(f"empty column name in selector {text!r}")
    return _Ref(name=name, nth=nth)


def _find_dash(token: str) -> int:
    in_quote = False
    depth = 0
    for pos, ch in enumerate(token):
        if ch == '"':
            in_quote = not in_quote
        elif in_quote:
            continue
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch == "-" and depth == 0:
            return pos
    return -1


def parse_selection(spec: str) -> _Spec:
    """Parse a selector specification such as '1,3-5,name[1],/^a/,!2'."""
    spec = spec.strip()
    invert = spec.startswith("!")
    if invert:
        spec = spec[1:]
    if spec == "":
        return _Spec((), invert)
    items = []
    for token in _split_tokens(spec):
        if token == "":
            raise ValueError(f"empty selector in {spec!r}")
        if len(token) >= 2 and token.startswith("/") and token.endswith("/"):
            items.append(_Regex(token[1:-1]))
            continue
        dash = _find_dash(token)
        if dash < 0:
            items.append(_parse_ref(token))
        else:
            items.append(_Range(_parse_ref(token[:dash]), _parse_ref(token[dash + 1 :])))
    return _Spec(tuple(items), invert)


def _resolve_ref(ref: _Ref, headers: Sequence[str], no_headers: bool) -> int:
    if ref.index is not None:
        if not 1 <= ref.index <= len(headers):
            raise ValueError(
                f"selector index {ref.index} is out of bounds (1..{len(headers)})"
            )
        return ref.index - 1
    if no_headers:
        raise ValueError(f"cannot select column by name {ref.name!r} without headers")
    found = [i for i, h in enumerate(headers) if h == ref.name]
    if ref.nth >= len(found):
        raise ValueError(f"selector name {ref.name!r}[{ref.nth}] not found in headers")
    return found[ref.nth]


def resolve_selection(
    spec: str | _Spec, headers: Sequence[str], no_headers: bool = False
) -> Selection:
    """Resolve a selector specification against a header row."""
    parsed = parse_selection(spec) if isinstance(spec, str) else spec
    if not parsed.items:
        indices = list(range(len(headers)))
    else:
        indices = []
        for item in parsed.items:
            if isinstance(item, _Regex):
                rx = re.compile(item.pattern)
                matched = [i for i, h in enumerate(headers) if rx.search(h)]
                if not matched:
                    raise ValueError(f"regex /{item.pattern}/ matched no columns")
                indices.extend(matched)
            elif isinstance(item, _Range):
                start = 0 if item.start is None else _resolve_ref(item.start, headers, no_headers)
                end = (
                    len(headers) - 1
                    if item.end is None
                    else _resolve_ref(item.end, headers, no_headers)
                )
                step = 1 if start <= end else -1
                indices.extend(range(start, end + step, step))
            else:
                indices.append(_resolve_ref(item, headers, no_headers))
    if parsed.invert:
        chosen = set(indices)
        indices = [i for i in range(len(headers)) if i not in chosen]
    return Selection(tuple(indices))


def select_columns(
    rows: Sequence[Sequence[str]], spec: str, no_headers: bool = False
) -> list[list[str]]:
    """Return every row reduced to the selected columns."""
    if not rows:
        return []
    sel = resolve_selection(spec, rows[0], no_headers)
    return [sel.select(row) for row in rows]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="select", description="Select columns from CSV data.")
    parser.add_argument("selection")
    parser.add_argument("input", nargs="?")
    parser.add_argument("-o", "--output")
    parser.add_argument("-n", "--no-headers", action="store_true")
    parser.add_argument("-d", "--delimiter", default=",")
    args = parser.parse_args(argv)
    rows = read_rows(args.input, args.delimiter)
    write_rows(select_columns(rows, args.selection, args.no_headers), args.output)
    return 0