"""CLI sub-command that decodes TLE files into JSON lines."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..core import Strategy
from . import common


def _sources(raw: List[str]) -> List[Optional[Path]]:
    if not raw:
        return [None]
    return [None if item == "-" else Path(item) for item in raw]


def run(ns: argparse.Namespace) -> int:
    strategy = Strategy.from_string(ns.decoder)
    exit_code = 0
    for path in _sources(ns.paths):
        label = "<stdin>" if path is None else str(path)
        try:
            chunks = list(common.read_chunks(path))
        except FileNotFoundError:
            print(f"file not found: {label}", file=sys.stderr)
            return 2
        for chunk in chunks:
            result = common.decode_chunk(chunk, strategy, label)
            if not result.ok:
                exit_code = 1
            common.emit(common.result_payload(result, source=label, index=chunk.index))
    return exit_code


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    config,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "decode",
        help="Decode files of consecutive 3-line TLEs and print one JSON object per record.",
    )
    common.add_shared_arguments(parser, config)
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files to decode ('-' or nothing reads stdin).",
    )
    parser.set_defaults(handler=run)
    return parser
