"""Grammar-based TLE decoder.

The input is matched by a sequence of anchored sub-parsers: the three-line
frame first, then one sub-parser per column of each element line, built
from the same tables as the direct decoder.  Unlike the direct decoder it
requires the whole input to be consumed and only accepts ``U``, ``C`` or
``S`` as classification.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern, Tuple, Union

from .direct import store_field
from .fields import CLASSIFICATIONS, decode_column
from .layout import LINE1, LINE2, LINE_LENGTH, Column, ColumnKind, with_strict_classification
from .types import TLE, ErrorKind, TLEError, invalid_format

Text = Union[str, bytes]

NAME_MAX_LENGTH = 24

_NAME = re.compile(r"[^\n]{1,%d}" % NAME_MAX_LENGTH)
_LINE_ENDING = re.compile(r"\r?\n")
_ELEMENT_LINE = re.compile(r"[^\n]{%d}" % LINE_LENGTH)

_REASONS = {
    ColumnKind.LITERAL: "wrong character",
    ColumnKind.SPACE: "expected space character",
    ColumnKind.CLASSIFICATION: "invalid classification",
}


@dataclass(frozen=True)
class SubParser:
    column: Column
    pattern: Pattern[str]


def _pattern_for(column: Column) -> Pattern[str]:
    if column.kind in (ColumnKind.LITERAL, ColumnKind.SPACE):
        return re.compile(re.escape(column.literal or ""))
    if column.kind is ColumnKind.CLASSIFICATION:
        return re.compile("|".join(re.escape(c) for c in CLASSIFICATIONS))
    return re.compile(r"[^\n]{%d}" % column.width)


def build_line_parser(columns: Tuple[Column, ...]) -> Tuple[SubParser, ...]:
    return tuple(SubParser(column, _pattern_for(column)) for column in columns)


LINE1_PARSER = build_line_parser(with_strict_classification(LINE1))
LINE2_PARSER = build_line_parser(LINE2)


def _expect(pattern: Pattern[str], text: str, pos: int, reason: str, line: int) -> re.Match:
    match = pattern.match(text, pos)
    if match is None:
        raise invalid_format("incomplete" if pos >= len(text) else reason, line=line)
    return match


def segment(text: str) -> Tuple[str, str, str]:
    """Split ``text`` into name, line 1 and line 2, consuming all of it."""

    name = _expect(_NAME, text, 0, "invalid name line", 0)
    ending = _expect(_LINE_ENDING, text, name.end(), "name too long", 0)
    line1 = _expect(_ELEMENT_LINE, text, ending.end(), "incorrect line length", 1)
    ending = _expect(_LINE_ENDING, text, line1.end(), "incorrect line length", 1)
    line2 = _expect(_ELEMENT_LINE, text, ending.end(), "incorrect line length", 2)
    pos = line2.end()
    trailing: Optional[re.Match] = _LINE_ENDING.match(text, pos)
    if trailing is not None:
        pos = trailing.end()
    if pos != len(text):
        raise invalid_format("trailing content", line=2)
    return name.group(), line1.group(), line2.group()


def parse_line(parsers: Tuple[SubParser, ...], line: str, number: int,
               values: Dict[str, object]) -> None:
    pos = 0
    for parser in parsers:
        column = parser.column
        match = parser.pattern.match(line, pos)
        if match is None:
            raise invalid_format(_REASONS.get(column.kind, "incorrect line length"),
                                 field=column.field, line=number, columns=column.span)
        pos = match.end()
        if column.field is None:
            continue
        value = decode_column(column, match.group().encode("utf-8"), number)
        store_field(column, value, number, values)


def parse(text: Text) -> TLE:
    """Decode a complete three-line TLE, rejecting any trailing content."""

    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TLEError(ErrorKind.ENCODING, "invalid encoding") from exc
    name, line1, line2 = segment(text)
    values: Dict[str, object] = {"name": name.strip()}
    parse_line(LINE1_PARSER, line1, 1, values)
    parse_line(LINE2_PARSER, line2, 2, values)
    return TLE(**values)  # type: ignore[arg-type]


def _chomp(line: Text) -> Text:
    terminator = "\n" if isinstance(line, str) else b"\n"
    return line[:-1] if line.endswith(terminator) else line


def from_lines(name: Text, line1: Text, line2: Text) -> TLE:
    """Decode the three lines of a TLE with the same grammar as :func:`parse`."""

    parts = [_chomp(part) for part in (name, line1, line2)]
    for number in (1, 2):
        if parts[number].endswith("\r" if isinstance(parts[number], str) else b"\r"):
            raise invalid_format("incorrect line length", line=number)
    if any(isinstance(part, bytes) for part in parts):
        parts = [part if isinstance(part, bytes) else part.encode("utf-8") for part in parts]
        return parse(b"\n".join(parts))
    return parse("\n".join(parts))


__all__ = [
    "NAME_MAX_LENGTH",
    "SubParser",
    "LINE1_PARSER",
    "LINE2_PARSER",
    "build_line_parser",
    "segment",
    "parse_line",
    "parse",
    "from_lines",
]
