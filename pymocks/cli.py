# pymocks/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config as cfg
from . import detect
from .errors import PymocksError
from .logconf import configure_logger


def _handle_config(args: argparse.Namespace) -> None:
    """Print the effective layered configuration for one section."""
    start = Path(args.start) if args.start else None
    eff = cfg.get_effective_config(args.section, start=start)
    print(json.dumps(eff, indent=2, sort_keys=True))
    print(f"# project config: {cfg.LAST_CONFIG_PATH or '<none>'}")


def _handle_backend(args: argparse.Namespace) -> None:
    """Print the backend a Mock would use in this process, and why."""
    name, reason = detect.choose_backend_name()
    print(f"{name} ({reason})")


def add_config_subparser(subparsers) -> None:
    p = subparsers.add_parser("config", help="show the effective configuration")
    p.add_argument("--section", default="mock", help="config section merged over [defaults]")
    p.add_argument("--start", default=None, help="directory where project config lookup starts")
    p.set_defaults(handler=_handle_config)


def add_backend_subparser(subparsers) -> None:
    p = subparsers.add_parser("backend", help="show which spy backend would be selected")
    p.set_defaults(handler=_handle_backend)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="pymocks")
    parser.add_argument("-v", "--verbose", action="store_true", help="log config discovery")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_config_subparser(subparsers)
    add_backend_subparser(subparsers)

    args = parser.parse_args(argv)
    logger = configure_logger(level=logging.DEBUG if args.verbose else logging.WARNING, name="pymocks.cli")
    try:
        args.handler(args)
    except PymocksError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
