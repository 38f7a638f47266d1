"""Command line interface for the tletools package."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from . import common, compare, decode, read_all


def build_parser() -> argparse.ArgumentParser:
    config = common.current_config()
    parser = argparse.ArgumentParser(prog="tletools", description="Two-line element set decoder")
    subparsers = parser.add_subparsers(dest="command")
    decode.configure_parser(subparsers, config)
    read_all.configure_parser(subparsers, config)
    compare.configure_parser(subparsers, config)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not hasattr(ns, "handler"):
        parser.print_help()
        return 1
    common.setup_logging(ns.log_level)
    return ns.handler(ns)


def entrypoint() -> None:
    sys.exit(main())
