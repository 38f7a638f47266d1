"""Common helpers for the tletools CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..config import AppConfig, load_config
from ..core import DecodeResult, Strategy, decode_lines
from ..core.direct import iter_lines
from ..core.types import invalid_format
from ..logging import configure_logging, get_logger, log_context

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

logger = get_logger("cli")


@dataclass(frozen=True)
class Chunk:
    """Three consecutive lines of an input file, starting at ``index * 3``."""

    index: int
    lines: List[Union[str, bytes]]

    @property
    def complete(self) -> bool:
        return len(self.lines) == 3


def add_shared_arguments(parser: argparse.ArgumentParser, config: AppConfig) -> None:
    """Register the options that are common to every sub-command."""

    parser.add_argument(
        "--log-level",
        default=config.log_level if config.log_level in LOG_LEVELS else "INFO",
        choices=sorted(LOG_LEVELS),
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--decoder",
        default=config.decoder.value,
        choices=[s.value for s in Strategy],
        help="Decoder strategy: 'direct' ignores content after the third line, 'grammar' rejects it.",
    )


def setup_logging(level_name: str) -> None:
    configure_logging(LOG_LEVELS.get(level_name.upper(), logging.INFO), stream=sys.stderr, force=True)


def iter_chunks(lines: Iterable[Union[str, bytes]]) -> Iterator[Chunk]:
    """Group ``lines`` three at a time; the last group may be short."""

    batch: List[Union[str, bytes]] = []
    index = 0
    for line in lines:
        batch.append(line)
        if len(batch) == 3:
            yield Chunk(index, batch)
            batch = []
            index += 1
    if batch:
        yield Chunk(index, batch)


def _decoded(line: bytes) -> Union[str, bytes]:
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError:
        return line


def read_chunks(path: Optional[Path]) -> Iterator[Chunk]:
    """Read ``path`` (stdin when ``None``) and yield its 3-line chunks.

    Files are split as bytes; a line that is not valid UTF-8 is kept as
    ``bytes`` so the decoder reports it as an encoding error for that record
    only.
    """

    if path is None:
        return iter_chunks(iter_lines(sys.stdin.read()))
    return iter_chunks(_decoded(line) for line in iter_lines(path.read_bytes()))


def line_text(line: Union[str, bytes]) -> str:
    """Text form of a chunk line for consumers that need ``str``."""

    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def decode_chunk(chunk: Chunk, strategy: Strategy, source: str) -> DecodeResult:
    """Decode one chunk, logging failures with the source location bound."""

    with log_context(source=source, index=chunk.index):
        if not chunk.complete:
            result = DecodeResult(error=invalid_format("incomplete"))
        else:
            result = decode_lines(*chunk.lines, strategy=strategy)
        if result.error is not None:
            logger.warning("decode.failed", extra={"error": result.error})
        else:
            logger.debug("decode.ok", extra={"norad": result.record.norad})
    return result


def result_payload(result: DecodeResult, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = dict(extra)
    if result.error is not None:
        payload["error"] = result.error.as_dict()
    else:
        payload["record"] = result.record.as_dict()
    return payload


def emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False))


def current_config() -> AppConfig:
    try:
        return load_config()
    except ValueError as exc:
        logger.error("config.invalid", extra={"error": str(exc)})
        return load_config({})


__all__ = [
    "Chunk",
    "LOG_LEVELS",
    "add_shared_arguments",
    "current_config",
    "decode_chunk",
    "emit",
    "iter_chunks",
    "line_text",
    "read_chunks",
    "result_payload",
    "setup_logging",
]
