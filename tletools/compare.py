"""Cross-check decoded records against the TLE reader bundled with SGP4.

``sgp4`` stores elements in the units its propagator works in (radians,
radians per minute).  They are converted back to TLE units before being
compared with a :class:`~tletools.core.TLE`.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from sgp4.api import Satrec

from tletools.core import TLE
from tletools.logging import get_logger

logger = get_logger(__name__)

MINUTES_PER_DAY = 1440.0
# revolutions per day -> radians per minute
XPDOTP = MINUTES_PER_DAY / (2.0 * math.pi)
DEFAULT_REL_TOL = 1e-9
DEFAULT_ABS_TOL = 1e-12


class ComparisonError(RuntimeError):
    pass


@dataclass(frozen=True)
class FieldDelta:
    field: str
    ours: Any
    theirs: Any

    def as_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "ours": self.ours, "theirs": self.theirs}


def sgp4_elements(line1: str, line2: str) -> Dict[str, Any]:
    """Read ``line1``/``line2`` with sgp4 and express the result in TLE units."""

    try:
        sat = Satrec.twoline2rv(line1, line2)
    except ValueError as exc:
        raise ComparisonError(f"sgp4 rejected the element lines: {exc}") from exc

    return {
        "epoch_year": sat.epochyr,
        "epoch_day": sat.epochdays,
        "dn_o2": sat.ndot * XPDOTP * MINUTES_PER_DAY,
        "ddn_o6": sat.nddot * XPDOTP * MINUTES_PER_DAY * MINUTES_PER_DAY,
        "bstar": sat.bstar,
        "inc": math.degrees(sat.inclo),
        "raan": math.degrees(sat.nodeo),
        "ecc": sat.ecco,
        "argp": math.degrees(sat.argpo),
        "M": math.degrees(sat.mo),
        "n": sat.no_kozai * XPDOTP,
        "rev_num": sat.revnum,
    }


def _ours(record: TLE) -> Dict[str, Any]:
    values = {name: getattr(record, name) for name in (
        "epoch_day", "dn_o2", "ddn_o6", "bstar", "inc", "raan", "ecc", "argp", "M", "n", "rev_num",
    )}
    # sgp4 keeps the two-digit year from the element line
    values["epoch_year"] = record.epoch_year % 100
    return values


def compare_with_sgp4(
    record: TLE,
    line1: str,
    line2: str,
    *,
    rel_tol: float = DEFAULT_REL_TOL,
    abs_tol: float = DEFAULT_ABS_TOL,
) -> Tuple[FieldDelta, ...]:
    """Return the fields where ``record`` and sgp4 disagree beyond tolerance."""

    theirs = sgp4_elements(line1, line2)
    deltas: List[FieldDelta] = []
    for name, ours in _ours(record).items():
        other = theirs[name]
        if isinstance(ours, int) and not isinstance(ours, bool):
            same = ours == int(other)
        else:
            same = math.isclose(ours, other, rel_tol=rel_tol, abs_tol=abs_tol)
        if not same:
            deltas.append(FieldDelta(name, ours, other))

    if deltas:
        logger.warning(
            "compare.mismatch",
            extra={"norad": record.norad, "fields": [d.field for d in deltas]},
        )
    else:
        logger.debug("compare.match", extra={"norad": record.norad})
    return tuple(deltas)


__all__ = ["ComparisonError", "FieldDelta", "sgp4_elements", "compare_with_sgp4"]
