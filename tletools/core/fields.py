"""Field decoders for the fixed-column TLE layout."""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from .layout import MANTISSA_WIDTH, Column, ColumnKind
from .types import ErrorKind, TLEError

_UINT_RE = re.compile(r"\+?[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)

CLASSIFICATIONS = ("U", "C", "S")
ECCENTRICITY_SCALE = 10_000_000.0
# Two-digit epoch years up to this value belong to the 21st century.
CENTURY_PIVOT = 56


def decode_text(raw: bytes, trim: bool = False) -> str:
    # UnicodeDecodeError is translated by the caller, which knows the column
    text = raw.decode("utf-8")
    return text.strip() if trim else text


def parse_uint(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    return int(text)


def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float {text!r}")
    return float(text)


def century_year(two_digit: int) -> int:
    return 2000 + two_digit if two_digit <= CENTURY_PIVOT else 1900 + two_digit


def packed_exponential(mantissa: int, exponent: int) -> float:
    """Value of a mantissa with an implied leading decimal point.

    ``mantissa`` holds five significant digits, so ``25302`` with exponent
    ``-4`` is ``0.25302e-4``.
    """

    return mantissa * 10.0 ** (exponent - 5)


def eccentricity(digits: int) -> float:
    return digits / ECCENTRICITY_SCALE


def _error(kind: ErrorKind, reason: str, column: Column, line: int,
           span: Optional[Tuple[int, int]] = None) -> TLEError:
    return TLEError(kind, reason, field=column.field, line=line, columns=span or column.span)


def _text(raw: bytes, column: Column, line: int, trim: bool,
          span: Optional[Tuple[int, int]] = None) -> str:
    try:
        return decode_text(raw, trim=trim)
    except UnicodeDecodeError as exc:
        raise _error(ErrorKind.ENCODING, "invalid encoding", column, line, span) from exc


_NUMBER_ERRORS = {
    ErrorKind.PARSE_INT: "cannot parse int",
    ErrorKind.PARSE_FLOAT: "cannot parse float",
}


def _number(parser, kind: ErrorKind, text: str, column: Column, line: int,
            span: Optional[Tuple[int, int]] = None):
    try:
        return parser(text)
    except ValueError as exc:
        raise _error(kind, _NUMBER_ERRORS[kind], column, line, span) from exc


def _uint(raw: bytes, column: Column, line: int, trim: bool) -> int:
    return _number(parse_uint, ErrorKind.PARSE_INT, _text(raw, column, line, trim), column, line)


def _exponential(raw: bytes, column: Column, line: int) -> float:
    split = column.start + MANTISSA_WIDTH
    mantissa_span = (column.start, split - 1)
    exponent_span = (split, column.end)
    mantissa_text = _text(raw[:MANTISSA_WIDTH], column, line, True, mantissa_span)
    mantissa = _number(parse_int, ErrorKind.PARSE_INT, mantissa_text, column, line, mantissa_span)
    exponent_text = _text(raw[MANTISSA_WIDTH:], column, line, False, exponent_span)
    exponent = _number(parse_int, ErrorKind.PARSE_INT, exponent_text, column, line, exponent_span)
    return packed_exponential(mantissa, exponent)


def decode_column(column: Column, raw: bytes, line: int) -> Any:
    """Decode ``raw`` (exactly ``column.width`` bytes) according to ``column``.

    Delimiter columns return ``None`` after checking the expected byte.
    Every failure is a :class:`TLEError` carrying the column's location.
    """

    kind = column.kind
    if kind is ColumnKind.LITERAL:
        if raw != column.literal.encode("ascii"):
            raise _error(ErrorKind.INVALID_FORMAT, "wrong character", column, line)
        return None
    if kind is ColumnKind.SPACE:
        if raw != b" ":
            raise _error(ErrorKind.INVALID_FORMAT, "expected space character", column, line)
        return None
    if kind is ColumnKind.CHAR:
        return chr(raw[0])
    if kind is ColumnKind.CLASSIFICATION:
        value = chr(raw[0])
        if value not in CLASSIFICATIONS:
            raise _error(ErrorKind.INVALID_FORMAT, "invalid classification", column, line)
        return value
    if kind is ColumnKind.TEXT:
        return _text(raw, column, line, column.trim)
    if kind is ColumnKind.YEAR:
        return century_year(_uint(raw, column, line, trim=False))
    if kind is ColumnKind.UINT:
        return _uint(raw, column, line, trim=column.trim)
    if kind is ColumnKind.FLOAT:
        text = _text(raw, column, line, column.trim)
        return _number(parse_float, ErrorKind.PARSE_FLOAT, text, column, line)
    if kind is ColumnKind.EXPONENTIAL:
        return _exponential(raw, column, line)
    if kind is ColumnKind.ECCENTRICITY:
        return eccentricity(_uint(raw, column, line, trim=False))
    raise AssertionError(f"unhandled column kind {kind}")  # pragma: no cover


__all__ = [
    "CLASSIFICATIONS",
    "CENTURY_PIVOT",
    "ECCENTRICITY_SCALE",
    "decode_text",
    "parse_uint",
    "parse_int",
    "parse_float",
    "century_year",
    "packed_exponential",
    "eccentricity",
    "decode_column",
]
