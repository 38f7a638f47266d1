"""Selection between the interchangeable decoder strategies."""

from __future__ import annotations

import enum
from importlib import import_module
from types import ModuleType
from typing import Union

from .types import DecodeResult, TLEError

Text = Union[str, bytes]


class Strategy(str, enum.Enum):
    DIRECT = "direct"
    GRAMMAR = "grammar"

    @classmethod
    def from_string(cls, value: Union[str, "Strategy"]) -> "Strategy":
        if isinstance(value, Strategy):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown decoder strategy '{value}'") from exc


DEFAULT_STRATEGY = Strategy.DIRECT

_MODULES = {
    Strategy.DIRECT: "tletools.core.direct",
    Strategy.GRAMMAR: "tletools.core.grammar",
}


def get_decoder(strategy: Union[str, Strategy] = DEFAULT_STRATEGY) -> ModuleType:
    """Return the module implementing ``parse`` and ``from_lines`` for ``strategy``."""

    return import_module(_MODULES[Strategy.from_string(strategy)])


def decode(text: Text, strategy: Union[str, Strategy] = DEFAULT_STRATEGY) -> DecodeResult:
    """Decode ``text`` and return the outcome as a value instead of raising."""

    decoder = get_decoder(strategy)
    try:
        return DecodeResult(record=decoder.parse(text))
    except TLEError as exc:
        return DecodeResult(error=exc)


def decode_lines(name: Text, line1: Text, line2: Text,
                 strategy: Union[str, Strategy] = DEFAULT_STRATEGY) -> DecodeResult:
    decoder = get_decoder(strategy)
    try:
        return DecodeResult(record=decoder.from_lines(name, line1, line2))
    except TLEError as exc:
        return DecodeResult(error=exc)


__all__ = ["Strategy", "DEFAULT_STRATEGY", "get_decoder", "decode", "decode_lines"]
