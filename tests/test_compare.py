from __future__ import annotations

import dataclasses

import pytest

from samples import ISS_LINE1, ISS_LINE2, ISS_TEXT, VANGUARD_LINE1, VANGUARD_LINE2, VANGUARD_TEXT
from tletools.compare import FieldDelta, compare_with_sgp4, sgp4_elements
from tletools.core import parse


@pytest.mark.parametrize(
    "text, line1, line2",
    [(ISS_TEXT, ISS_LINE1, ISS_LINE2), (VANGUARD_TEXT, VANGUARD_LINE1, VANGUARD_LINE2)],
)
def test_decoded_records_agree_with_sgp4(text: str, line1: str, line2: str) -> None:
    assert compare_with_sgp4(parse(text), line1, line2) == ()


def test_sgp4_elements_in_tle_units() -> None:
    elements = sgp4_elements(ISS_LINE1, ISS_LINE2)
    assert elements["epoch_year"] == 20
    assert elements["rev_num"] == 21279
    assert elements["inc"] == pytest.approx(51.6443)
    assert elements["n"] == pytest.approx(15.49165514)
    assert elements["bstar"] == pytest.approx(2.5302e-5)


def test_mismatched_fields_are_reported() -> None:
    record = dataclasses.replace(parse(ISS_TEXT), inc=51.7, rev_num=1)
    deltas = compare_with_sgp4(record, ISS_LINE1, ISS_LINE2)
    assert [d.field for d in deltas] == ["inc", "rev_num"]
    assert deltas[0] == FieldDelta("inc", 51.7, pytest.approx(51.6443))
    assert deltas[1].as_dict() == {"field": "rev_num", "ours": 1, "theirs": 21279}
