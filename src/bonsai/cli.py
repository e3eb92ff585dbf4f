"""Command line interface for bonsai.

Run:
  bonsai                 # grow a tree and wait for a key
  bonsai -l -M 8 -L 60   # watch a bushier tree grow
  bonsai -p -s 42        # print a reproducible tree to stdout
  bonsai --help
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from utils.checkpoint import default_checkpoint_path

from .app import App, AppSettings
from .config import Defaults, env_seed, set_log_level, verbosity_to_level
from .render import BaseType
from .tree_parameters import OptionsError, TreeOptions, parse_leaves

_LOGGER = logging.getLogger(__name__)


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"{raw!r} is not a number") from err
    if value <= 0:
        raise argparse.ArgumentTypeError(f"time must be larger than 0; got {raw}")
    return value


def _base_type(raw: str) -> BaseType:
    try:
        return BaseType(int(raw))
    except ValueError as err:
        names = ", ".join(f"{b.value}={b.name.lower()}" for b in BaseType)
        raise argparse.ArgumentTypeError(f"base must be one of {names}") from err


def build_parser(defaults: Optional[Defaults] = None) -> argparse.ArgumentParser:
    """Build the argument parser, using `defaults` for the growth settings."""
    d = defaults or Defaults()
    p = argparse.ArgumentParser(
        prog="bonsai",
        description="Grow a procedurally generated bonsai tree in your terminal.",
    )
    p.add_argument(
        "-l", "--live", action="store_true", help="live mode: show each step of growth"
    )
    p.add_argument(
        "-t",
        "--time",
        type=_positive_float,
        default=d.time_step,
        metavar="TIME",
        help="in live mode, wait TIME secs between steps of growth (default: %(default)s)",
    )
    p.add_argument(
        "-i", "--infinite", action="store_true", help="infinite mode: keep growing trees"
    )
    p.add_argument(
        "-w",
        "--wait",
        type=_positive_float,
        default=d.time_wait,
        metavar="TIME",
        help="in infinite mode, wait TIME between each tree (default: %(default)s)",
    )
    p.add_argument(
        "-S",
        "--screensaver",
        action="store_true",
        help="screensaver mode; equivalent to -li and quit on any keypress",
    )
    p.add_argument("-m", "--message", metavar="STR", help="attach message next to the tree")
    p.add_argument(
        "-b",
        "--base",
        type=_base_type,
        default=BaseType.LARGE,
        metavar="INT",
        help="ascii-art plant base to use, 0 is none (default: 2)",
    )
    p.add_argument(
        "-c",
        "--leaf",
        default=",".join(d.leaves),
        metavar="LIST",
        help="list of comma-delimited strings randomly chosen for leaves",
    )
    p.add_argument(
        "-M",
        "--multiplier",
        type=int,
        default=d.multiplier,
        metavar="INT",
        help="branch multiplier; higher -> more branching (0-20) (default: %(default)s)",
    )
    p.add_argument(
        "-L",
        "--life",
        type=int,
        default=d.life_start,
        metavar="INT",
        help="life; higher -> more growth (0-200) (default: %(default)s)",
    )
    p.add_argument(
        "-p", "--print", action="store_true", help="print tree to terminal when finished"
    )
    p.add_argument("-s", "--seed", type=int, metavar="INT", help="seed random number generator")
    p.add_argument(
        "--clamp",
        action="store_true",
        default=d.clamp_deltas,
        help="limit every growth step to one cell in each direction",
    )
    p.add_argument(
        "-W",
        "--save",
        nargs="?",
        const=default_checkpoint_path(),
        type=Path,
        metavar="FILE",
        help="save progress to file (default: %(const)s)",
    )
    p.add_argument(
        "-C",
        "--load",
        nargs="?",
        const=default_checkpoint_path(),
        type=Path,
        metavar="FILE",
        help="load progress from file (default: %(const)s)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase output verbosity (repeatable)",
    )
    return p


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    """Validate parsed arguments and turn them into AppSettings.

    Raises:
        OptionsError: On out-of-range or malformed values.
    """
    if args.seed is not None:
        seed = args.seed
    else:
        try:
            seed = env_seed()
        except ValueError as err:
            raise OptionsError(f"BONSAI_SEED must be an integer: {err}") from err
    if seed is not None and seed <= 0:
        raise OptionsError(f"seed must be a positive integer; got {seed}")

    options = TreeOptions(
        life_start=args.life,
        multiplier=args.multiplier,
        seed=seed,
        clamp_deltas=args.clamp,
        leaves=parse_leaves(args.leaf),
    ).validate()

    return AppSettings(
        options=options,
        live=args.live,
        infinite=args.infinite,
        screensaver=args.screensaver,
        print_tree=args.print,
        time_step=args.time,
        time_wait=args.wait,
        message=args.message,
        base=args.base,
        verbosity=args.verbose,
        save_path=args.save,
        load_path=args.load,
    )


def configure_logging(verbosity: int, to_stderr: bool) -> None:
    """Attach handlers so logs never land on a curses screen.

    Logs go to ``$BONSAI_LOGFILE`` when set, otherwise to stderr only when
    curses is not in use and verbose output was asked for. Without a handler
    warnings still reach stderr through logging's last-resort handler.
    """
    set_log_level(verbosity_to_level(verbosity))
    root = logging.getLogger("bonsai")
    if root.handlers:
        return
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    logfile = os.getenv("BONSAI_LOGFILE")
    handler: Optional[logging.Handler] = None
    if logfile:
        handler = logging.FileHandler(logfile, encoding="utf-8")
    elif to_stderr and verbosity > 0:
        handler = logging.StreamHandler(sys.stderr)
    if handler is not None:
        handler.setFormatter(fmt)
        root.addHandler(handler)
        logging.getLogger("utils").addHandler(handler)
        logging.getLogger("utils").setLevel(root.level)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``bonsai`` command."""
    try:
        defaults = Defaults.from_env()
    except ValueError as err:
        parser = build_parser()
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: invalid BONSAI_* setting: {err}", file=sys.stderr)
        return 2

    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except OptionsError as err:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return 2

    curses_free = settings.print_tree and not (
        settings.live or settings.infinite or settings.screensaver
    )
    configure_logging(settings.verbosity, to_stderr=curses_free)
    _LOGGER.debug("Settings: %s", settings)

    return App(settings).run()


if __name__ == "__main__":
    sys.exit(main())
