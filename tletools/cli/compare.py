"""CLI sub-command comparing decoded records with the sgp4 TLE reader."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..compare import DEFAULT_REL_TOL, ComparisonError, compare_with_sgp4
from ..core import Strategy
from . import common


def run(ns: argparse.Namespace) -> int:
    path = Path(ns.path)
    strategy = Strategy.from_string(ns.decoder)
    try:
        chunks = list(common.read_chunks(path))
    except FileNotFoundError:
        print(f"file not found: {path}", file=sys.stderr)
        return 2

    mismatches = 0
    for chunk in chunks:
        result = common.decode_chunk(chunk, strategy, str(path))
        if not result.ok:
            mismatches += 1
            common.emit(common.result_payload(result, index=chunk.index))
            continue
        record = result.record
        try:
            deltas = compare_with_sgp4(
                record,
                common.line_text(chunk.lines[1]),
                common.line_text(chunk.lines[2]),
                rel_tol=ns.rel_tol,
            )
        except ComparisonError as exc:
            mismatches += 1
            common.emit({"index": chunk.index, "norad": record.norad, "error": str(exc)})
            continue
        if deltas:
            mismatches += 1
        common.emit({
            "index": chunk.index,
            "norad": record.norad,
            "name": record.name,
            "deltas": [d.as_dict() for d in deltas],
        })

    if not ns.quiet:
        print(f"{len(chunks)} records, {mismatches} mismatched", file=sys.stderr)
    return 1 if mismatches else 0


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    config,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "compare",
        help="Decode a TLE file and cross-check each record with sgp4.",
    )
    common.add_shared_arguments(parser, config)
    parser.add_argument("path", help="File of consecutive 3-line TLEs.")
    parser.add_argument(
        "--rel-tol",
        type=float,
        default=DEFAULT_REL_TOL,
        help="Relative tolerance for floating point fields.",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress the summary line.")
    parser.set_defaults(handler=run)
    return parser
