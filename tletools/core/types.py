"""Shared dataclasses and the error taxonomy for the TLE decoders."""

from __future__ import annotations

import datetime as dt
import enum
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TLE:
    """Representation of a decoded two-line element set.

    All values are expressed in the units used by the TLE format itself:
    angles in degrees, mean motion in revolutions per day.
    """

    name: str
    norad: str
    classification: str
    int_desig: str
    epoch_year: int
    epoch_day: float
    dn_o2: float
    ddn_o6: float
    bstar: float
    set_num: int
    inc: float
    raan: float
    ecc: float
    argp: float
    M: float
    n: float
    rev_num: int

    @property
    def epoch(self) -> dt.datetime:
        """Epoch as a timezone-aware UTC datetime.

        Raises :class:`OverflowError` or :class:`ValueError` when ``epoch_day``
        is too large or not finite for :mod:`datetime`.
        """

        day_int = int(self.epoch_day)
        frac = self.epoch_day - day_int
        base = dt.datetime(self.epoch_year, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(days=day_int - 1)
        return base + dt.timedelta(seconds=frac * 86400.0)

    def as_dict(self) -> Dict[str, Any]:
        """Field values plus the ISO epoch, or ``None`` when it is out of range."""

        payload = asdict(self)
        try:
            payload["epoch"] = self.epoch.isoformat()
        except (OverflowError, ValueError):
            payload["epoch"] = None
        return payload


class ErrorKind(str, enum.Enum):
    ENCODING = "encoding"
    INVALID_FORMAT = "invalid_format"
    PARSE_INT = "parse_int"
    PARSE_FLOAT = "parse_float"


class TLEError(ValueError):
    """Raised when a TLE cannot be decoded.

    A single error type tagged with :class:`ErrorKind`.  ``reason`` is a short
    stable string; ``field``, ``line`` and ``columns`` (0-based, inclusive)
    locate the failure when it is tied to a specific column range.
    """

    def __init__(
        self,
        kind: ErrorKind,
        reason: Optional[str] = None,
        *,
        field: Optional[str] = None,
        line: Optional[int] = None,
        columns: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.kind = kind
        self.reason = reason
        self.field = field
        self.line = line
        self.columns = columns
        super().__init__(self._render())

    def _render(self) -> str:
        text = self.kind.value if self.reason is None else f"{self.kind.value}: {self.reason}"
        location = []
        if self.field:
            location.append(self.field)
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.columns is not None:
            start, end = self.columns
            location.append(f"columns {start}-{end}" if start != end else f"column {start}")
        if location:
            text = f"{text} ({', '.join(location)})"
        return text

    def as_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "field": self.field,
            "line": self.line,
            "columns": list(self.columns) if self.columns is not None else None,
        }


def invalid_format(reason: str, **location: Any) -> TLEError:
    return TLEError(ErrorKind.INVALID_FORMAT, reason, **location)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of a decode attempt: exactly one of ``record`` or ``error``."""

    record: Optional[TLE] = None
    error: Optional[TLEError] = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("DecodeResult needs exactly one of record or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TLE:
        if self.error is not None:
            raise self.error
        return self.record  # type: ignore[return-value]


__all__ = ["TLE", "ErrorKind", "TLEError", "DecodeResult", "invalid_format"]
