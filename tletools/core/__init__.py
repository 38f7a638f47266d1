"""Public API for tletools core primitives."""

from .types import TLE, DecodeResult, ErrorKind, TLEError
from .direct import from_lines, parse
from ._dispatch import DEFAULT_STRATEGY, Strategy, decode, decode_lines, get_decoder

__all__ = [
    "TLE",
    "DecodeResult",
    "ErrorKind",
    "TLEError",
    "parse",
    "from_lines",
    "Strategy",
    "DEFAULT_STRATEGY",
    "decode",
    "decode_lines",
    "get_decoder",
]
