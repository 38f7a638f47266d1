from __future__ import annotations

import pytest

from samples import ISS_LINE1, ISS_LINE2, ISS_NAME, ISS_TEXT, VANGUARD_TEXT, patch, three_lines
from tletools.core import ErrorKind, TLEError, direct, grammar


def _error(text) -> TLEError:
    with pytest.raises(TLEError) as info:
        grammar.parse(text)
    return info.value


@pytest.mark.parametrize("text", [ISS_TEXT, VANGUARD_TEXT])
def test_grammar_matches_direct_decoder(text: str) -> None:
    assert grammar.parse(text) == direct.parse(text)


def test_optional_final_line_ending() -> None:
    expected = direct.parse(ISS_TEXT)
    assert grammar.parse(ISS_TEXT.rstrip("\n")) == expected
    assert grammar.parse(ISS_TEXT.replace("\n", "\r\n")) == expected


def test_segment_returns_the_three_lines() -> None:
    assert grammar.segment(ISS_TEXT) == (ISS_NAME, ISS_LINE1, ISS_LINE2)


def test_trailing_content_is_rejected() -> None:
    text = ISS_TEXT + "EXTRA\n"
    assert direct.parse(text) == direct.parse(ISS_TEXT)
    err = _error(text)
    assert err.kind is ErrorKind.INVALID_FORMAT
    assert err.reason == "trailing content"
    assert _error(ISS_TEXT + "\n").reason == "trailing content"


def test_classification_is_validated() -> None:
    text = three_lines(ISS_NAME, patch(ISS_LINE1, 7, "X"), ISS_LINE2)
    assert direct.parse(text).classification == "X"
    err = _error(text)
    assert err.reason == "invalid classification"
    assert err.columns == (7, 7)


@pytest.mark.parametrize("classification", ["U", "C", "S"])
def test_all_classifications_accepted(classification: str) -> None:
    text = three_lines(ISS_NAME, patch(ISS_LINE1, 7, classification), ISS_LINE2)
    assert grammar.parse(text).classification == classification


def test_name_limited_to_24_characters() -> None:
    assert grammar.parse(three_lines("X" * 24, ISS_LINE1, ISS_LINE2)).name == "X" * 24
    assert _error(three_lines("X" * 25, ISS_LINE1, ISS_LINE2)).reason == "name too long"


def test_empty_name_line_is_rejected() -> None:
    assert _error(three_lines("", ISS_LINE1, ISS_LINE2)).reason == "invalid name line"


def test_incomplete_input() -> None:
    assert _error(f"{ISS_NAME}\n{ISS_LINE1}\n").reason == "incomplete"
    assert _error(f"{ISS_NAME}\n{ISS_LINE1}").reason == "incomplete"
    assert _error("").reason == "incomplete"


@pytest.mark.parametrize("line1", [ISS_LINE1[:-1], ISS_LINE1 + "7"])
def test_line_length(line1: str) -> None:
    err = _error(three_lines(ISS_NAME, line1, ISS_LINE2))
    assert err.reason == "incorrect line length"
    assert err.line == 1


@pytest.mark.parametrize(
    "line, start, text",
    [
        (1, 0, "3"),
        (1, 8, "X"),
        (1, 62, "1"),
        (1, 18, "2x"),
        (1, 33, "          "),
        (1, 59, "4-"),
        (2, 2, "25543"),
        (2, 8, " 51.64x3"),
        (2, 26, " 004885"),
        (2, 63, "     "),
    ],
)
def test_column_errors_agree_with_direct_decoder(line: int, start: int, text: str) -> None:
    line1 = patch(ISS_LINE1, start, text) if line == 1 else ISS_LINE1
    line2 = patch(ISS_LINE2, start, text) if line == 2 else ISS_LINE2
    payload = three_lines(ISS_NAME, line1, line2)
    with pytest.raises(TLEError) as expected:
        direct.parse(payload)
    err = _error(payload)
    assert (err.kind, err.reason, err.field, err.line, err.columns) == (
        expected.value.kind,
        expected.value.reason,
        expected.value.field,
        expected.value.line,
        expected.value.columns,
    )


def test_from_lines() -> None:
    assert grammar.from_lines(ISS_NAME, ISS_LINE1, ISS_LINE2) == direct.parse(ISS_TEXT)
    assert grammar.from_lines(ISS_NAME, ISS_LINE1 + "\n", ISS_LINE2 + "\n") == direct.parse(ISS_TEXT)


@pytest.mark.parametrize("line", [1, 2])
@pytest.mark.parametrize("as_bytes", [False, True])
def test_from_lines_rejects_carriage_return_terminator(line: int, as_bytes: bool) -> None:
    lines = [ISS_NAME, ISS_LINE1, ISS_LINE2]
    lines[line] += "\r\n"
    args = [part.encode("ascii") if as_bytes else part for part in lines]
    with pytest.raises(TLEError) as info:
        grammar.from_lines(*args)
    assert info.value.kind is ErrorKind.INVALID_FORMAT
    assert info.value.reason == "incorrect line length"
    assert info.value.line == line
    with pytest.raises(TLEError) as expected:
        direct.from_lines(*args)
    assert (expected.value.reason, expected.value.line) == ("incorrect line length", line)


def test_invalid_utf8_bytes() -> None:
    err = _error(ISS_TEXT.encode("ascii") + b"\xff")
    assert err.kind is ErrorKind.ENCODING
