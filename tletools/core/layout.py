"""Fixed-column layout of the two TLE element lines.

Offsets are 0-based and inclusive on both ends.  Both decoders walk these
tables; nothing else in the package hard-codes a column number.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

LINE_LENGTH = 69


class ColumnKind(enum.Enum):
    LITERAL = "literal"
    SPACE = "space"
    TEXT = "text"
    CHAR = "char"
    CLASSIFICATION = "classification"
    YEAR = "year"
    UINT = "uint"
    FLOAT = "float"
    EXPONENTIAL = "exponential"
    ECCENTRICITY = "eccentricity"


@dataclass(frozen=True)
class Column:
    start: int
    end: int
    kind: ColumnKind
    field: Optional[str] = None
    literal: Optional[str] = None
    trim: bool = False
    same_as: Optional[str] = None

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)


def _literal(pos: int, char: str) -> Column:
    return Column(pos, pos, ColumnKind.LITERAL, literal=char)


def _space(pos: int) -> Column:
    return Column(pos, pos, ColumnKind.SPACE, literal=" ")


LINE1: Tuple[Column, ...] = (
    _literal(0, "1"),
    _space(1),
    Column(2, 6, ColumnKind.TEXT, "norad", trim=True),
    Column(7, 7, ColumnKind.CHAR, "classification"),
    _space(8),
    Column(9, 16, ColumnKind.TEXT, "int_desig", trim=True),
    _space(17),
    Column(18, 19, ColumnKind.YEAR, "epoch_year"),
    Column(20, 31, ColumnKind.FLOAT, "epoch_day"),
    _space(32),
    Column(33, 42, ColumnKind.FLOAT, "dn_o2", trim=True),
    _space(43),
    # 6-column signed mantissa followed by a 2-column signed exponent
    Column(44, 51, ColumnKind.EXPONENTIAL, "ddn_o6"),
    _space(52),
    Column(53, 60, ColumnKind.EXPONENTIAL, "bstar"),
    _space(61),
    _literal(62, "0"),  # ephemeris type
    _space(63),
    Column(64, 67, ColumnKind.UINT, "set_num", trim=True),
)

LINE2: Tuple[Column, ...] = (
    _literal(0, "2"),
    _space(1),
    Column(2, 6, ColumnKind.TEXT, "norad", same_as="norad"),
    _space(7),
    Column(8, 15, ColumnKind.FLOAT, "inc", trim=True),
    _space(16),
    Column(17, 24, ColumnKind.FLOAT, "raan", trim=True),
    _space(25),
    Column(26, 32, ColumnKind.ECCENTRICITY, "ecc"),
    _space(33),
    Column(34, 41, ColumnKind.FLOAT, "argp", trim=True),
    _space(42),
    Column(43, 50, ColumnKind.FLOAT, "M", trim=True),
    _space(51),
    Column(52, 62, ColumnKind.FLOAT, "n", trim=True),
    Column(63, 67, ColumnKind.UINT, "rev_num", trim=True),
)

LINES = {1: LINE1, 2: LINE2}

MANTISSA_WIDTH = 6


def with_strict_classification(columns: Tuple[Column, ...]) -> Tuple[Column, ...]:
    """Return ``columns`` with the classification byte restricted to U/C/S."""

    return tuple(
        Column(c.start, c.end, ColumnKind.CLASSIFICATION, c.field) if c.kind is ColumnKind.CHAR else c
        for c in columns
    )


__all__ = [
    "LINE_LENGTH",
    "ColumnKind",
    "Column",
    "LINE1",
    "LINE2",
    "LINES",
    "MANTISSA_WIDTH",
    "with_strict_classification",
]
