# pw_volume.py
from __future__ import annotations

import argparse
import configparser
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backend import PipeWireVolumeBackend
from models import Change, Mute, Operation, Status
from pw_errors import ExternalToolFailure, PwVolumeError
from store_config import ConfigStore
from volume_math import MUTE_TRANSITIONS, is_decimal_percentage

log = logging.getLogger("pw-volume")


def _delta_arg(s: str) -> str:
    if not is_decimal_percentage(s):
        raise argparse.ArgumentTypeError(f'"{s}" is not a decimal percentage')
    return s


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pw-volume",
        description="Basic interface to PipeWire volume controls",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    p.add_argument("--config", type=Path, default=None, help="configuration file path")
    p.add_argument("--dry-run", action="store_true", help="print the pw-cli payload instead of sending it")

    sub = p.add_subparsers(dest="command", metavar="{mute,change,status}")
    sub.required = True

    m = sub.add_parser("mute", help="mutes audio [possible values: on, off, toggle]")
    m.add_argument("transition", metavar="TRANSITION", choices=MUTE_TRANSITIONS)

    c = sub.add_parser("change", help="adjusts volume by decimal percentage, e.g. '+1%%', '-0.5%%'")
    c.add_argument("delta", metavar="DELTA", type=_delta_arg, help="decimal percentage, e.g. '+1%%', '-0.5%%'")

    sub.add_parser("status", help="get volume and mute information")
    return p


def _normalize_argv(argv: List[str]) -> List[str]:
    # "change -5%" would otherwise be read as an option
    out = list(argv)
    for i, a in enumerate(out[:-1]):
        if a == "change" and out[i + 1].startswith("-") and is_decimal_percentage(out[i + 1]):
            out.insert(i + 1, "--")
            break
    return out


def operation_from_args(args: argparse.Namespace) -> Operation:
    if args.command == "mute":
        return Mute(args.transition)
    if args.command == "change":
        return Change(args.delta)
    return Status()


def setup_logging(level: str, verbose: bool) -> None:
    lvl = logging.getLevelName(level)
    if verbose:
        lvl = logging.DEBUG
    elif not isinstance(lvl, int):
        lvl = logging.WARNING
    logging.basicConfig(
        level=lvl,
        stream=sys.stderr,
        format="%(name)s: %(levelname)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    raw = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(_normalize_argv(raw))

    store = ConfigStore(path_override=args.config)
    try:
        settings = store.settings()
    except (OSError, ValueError, configparser.Error) as e:
        setup_logging("WARNING", args.verbose)
        log.error("cannot read config %s: %s", store.file_path, e)
        return 1
    setup_logging(settings.log_level, args.verbose)
    log.debug("config: %s", store.file_path)

    backend = PipeWireVolumeBackend(settings, dry_run=args.dry_run)
    try:
        backend.refresh()
        out = backend.run(operation_from_args(args))
    except ExternalToolFailure as e:
        log.error("%s", e)
        return e.exit_status
    except PwVolumeError as e:
        log.error("%s", e)
        return 1

    if out is not None:
        print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
