"""CLI sub-command that decodes every file of a dated data tree.

The expected layout is ``DATA_DIR/<folder>/<file>``, for example one folder
per download date, each file holding consecutive 3-line TLEs.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator

from ..compare import ComparisonError, compare_with_sgp4
from ..core import Strategy
from . import common


def iter_data_files(data_dir: Path) -> Iterator[Path]:
    for folder in sorted(p for p in data_dir.iterdir() if p.is_dir()):
        for path in sorted(p for p in folder.iterdir() if p.is_file()):
            yield path


def run(ns: argparse.Namespace) -> int:
    data_dir = Path(ns.data_dir).expanduser()
    if not data_dir.is_dir():
        print(f"data directory not found: {data_dir}", file=sys.stderr)
        return 2

    strategy = Strategy.from_string(ns.decoder)
    exit_code = 0
    for path in iter_data_files(data_dir):
        for chunk in common.read_chunks(path):
            result = common.decode_chunk(chunk, strategy, str(path))
            payload = common.result_payload(result, path=str(path), index=chunk.index)
            if not result.ok:
                exit_code = 1
            elif ns.compare:
                try:
                    deltas = compare_with_sgp4(
                        result.record,
                        common.line_text(chunk.lines[1]),
                        common.line_text(chunk.lines[2]),
                    )
                except ComparisonError as exc:
                    payload["sgp4"] = {"error": str(exc)}
                    exit_code = 1
                else:
                    payload["sgp4"] = {"deltas": [d.as_dict() for d in deltas]}
                    if deltas:
                        exit_code = 1
            common.emit(payload)
    return exit_code


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    config,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "read-all",
        help="Decode every TLE file found under DATA_DIR/<folder>/.",
    )
    common.add_shared_arguments(parser, config)
    parser.add_argument(
        "data_dir",
        nargs="?",
        default=str(config.data_dir),
        help="Root of the data tree.",
    )
    parser.add_argument(
        "--compare",
        action=argparse.BooleanOptionalAction,
        default=config.compare_enabled,
        help="Cross-check every record with the sgp4 TLE reader.",
    )
    parser.set_defaults(handler=run)
    return parser
