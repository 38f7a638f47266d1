"""Direct byte-slice TLE decoder.

Validates the length of each element line, then reads every column range
listed in :mod:`tletools.core.layout` straight out of the encoded line.
Only the first three lines of the input are looked at; anything after
them is ignored.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple, Union

from .fields import decode_column
from .layout import LINE1, LINE2, LINE_LENGTH, Column
from .types import TLE, ErrorKind, TLEError, invalid_format

Text = Union[str, bytes]


def iter_lines(text: Text) -> Iterator[Text]:
    """Yield lines terminated by ``\\n`` or ``\\r\\n``, without the terminator.

    A terminator at the very end of the input does not start a new line.
    Other characters that :meth:`str.splitlines` would treat as boundaries
    are kept as ordinary content.
    """

    newline, carriage = ("\n", "\r") if isinstance(text, str) else (b"\n", b"\r")
    pieces = text.split(newline)
    tail = pieces.pop()
    for piece in pieces:
        yield piece[:-1] if piece.endswith(carriage) else piece
    if tail:
        yield tail


def split_three(text: Text) -> Tuple[Text, Text, Text]:
    lines: List[Text] = []
    for line in iter_lines(text):
        lines.append(line)
        if len(lines) == 3:
            return lines[0], lines[1], lines[2]
    raise invalid_format("incomplete")


def _as_bytes(line: Text, number: int) -> bytes:
    if isinstance(line, bytes):
        return line
    try:
        return line.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise TLEError(ErrorKind.ENCODING, "invalid encoding", line=number) from exc


def _as_name(name: Text) -> str:
    if isinstance(name, bytes):
        try:
            name = name.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TLEError(ErrorKind.ENCODING, "invalid encoding", field="name", line=0) from exc
    return name.strip()


def ensure_line_length(raw: bytes, number: int) -> bytes:
    """Return the 69-byte payload, allowing one trailing ``\\n``."""

    if len(raw) == LINE_LENGTH or (len(raw) == LINE_LENGTH + 1 and raw[LINE_LENGTH:] == b"\n"):
        return raw[:LINE_LENGTH]
    raise invalid_format("incorrect line length", line=number)


def extract_fields(columns: Tuple[Column, ...], payload: bytes, number: int,
                   values: Dict[str, object]) -> None:
    """Decode ``payload`` column by column into ``values``.

    Stops at the first failing column.  Columns with ``same_as`` are compared
    with an already-decoded value instead of being stored.
    """

    for column in columns:
        value = decode_column(column, payload[column.start:column.end + 1], number)
        store_field(column, value, number, values)


def store_field(column: Column, value: object, number: int, values: Dict[str, object]) -> None:
    if column.field is None:
        return
    if column.same_as is None:
        values[column.field] = value
    elif value != values[column.same_as]:
        raise invalid_format(
            "norad on line 1 and 2 are different",
            field=column.field,
            line=number,
            columns=column.span,
        )


def from_lines(name: Text, line1: Text, line2: Text) -> TLE:
    """Decode a TLE from its three individual lines."""

    values: Dict[str, object] = {"name": _as_name(name)}
    payload1 = ensure_line_length(_as_bytes(line1, 1), 1)
    extract_fields(LINE1, payload1, 1, values)
    payload2 = ensure_line_length(_as_bytes(line2, 2), 2)
    extract_fields(LINE2, payload2, 2, values)
    return TLE(**values)  # type: ignore[arg-type]


def parse(text: Text) -> TLE:
    """Decode a TLE from text holding the name line and the two element lines."""

    return from_lines(*split_three(text))


__all__ = [
    "iter_lines",
    "split_three",
    "ensure_line_length",
    "extract_fields",
    "store_field",
    "from_lines",
    "parse",
]
