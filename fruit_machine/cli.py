from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__ as FM_VERSION
from . import money
from .config import MachineConfig, load_config_file, parse_cash, read_config_data, validate_config
from .errors import FruitMachineError
from .logging_utils import setup_logging
from .session import render_summary, run_session
from .simulate import simulate

log = logging.getLogger("fruit_machine.cli")

_CLEAR_SCREEN = "\033[2J\033[H"


# ------------------------------- Helpers ------------------------------------ #


def _fail(message: str) -> int:
    print(f"failed: {message}", file=sys.stderr)
    return 2


def _load_config(args: argparse.Namespace) -> MachineConfig:
    path = getattr(args, "config", None)
    config = load_config_file(path) if path else MachineConfig()
    return config.with_overrides(seed=getattr(args, "seed", None))


def _cash_arg(raw: Optional[str], config: MachineConfig) -> Any:
    if raw is None:
        return None
    amount = parse_cash(raw, truncate=config.truncate_starting_cash)
    if amount is None:
        raise FruitMachineError(f"--cash must be a non-negative amount, got {raw!r}")
    return amount


def _clear_screen() -> None:
    print(_CLEAR_SCREEN, end="", flush=True)


def _json_default(value: Any) -> Any:
    return str(value)


# ------------------------------- Commands ----------------------------------- #


def _cmd_play(args: argparse.Namespace) -> int:
    config = _load_config(args)
    starting_cash = _cash_arg(args.cash, config)
    try:
        summary = run_session(
            config,
            clear=_clear_screen if args.clear else None,
            starting_cash=starting_cash,
        )
    except (EOFError, KeyboardInterrupt):
        print()
        return 0
    for line in render_summary(summary, config.currency):
        print(line)
    return 0


def _cmd_simulate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    starting_cash = _cash_arg(args.cash, config)
    report = simulate(
        config,
        starting_cash,
        args.rounds,
        stop_on_bankrupt=not args.no_stop_on_bankrupt,
    )
    if args.json:
        print(json.dumps(report, indent=2, default=_json_default))
        return 0

    stats = report["stats"]
    cur = config.currency
    print(f"Rounds: {stats['rounds']} of {report['requested_rounds']} ({stats['free_rounds']} free)")
    print(f"Staked: {money.fmt(stats['total_staked'], cur)}")
    print(f"Won: {money.fmt(stats['total_won'], cur)}")
    print(f"RTP: {stats['rtp_pct']}%")
    print("Tiers: " + ", ".join(f"{k}={v}" for k, v in stats["tiers"].items()))
    print(f"Final cash: {money.fmt(report['final']['player_cash'], cur)}")
    print(f"Final prize pot: {money.fmt(report['final']['prize_pot'], cur)}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    data: Dict[str, Any] = read_config_data(Path(args.path))
    errs = validate_config(data)
    if errs:
        print("failed validation:", file=sys.stderr)
        for e in errs:
            print(f"- {e}", file=sys.stderr)
        return 2
    print("ok")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fruit-machine",
        description="Four-reel fruit machine played at the terminal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {FM_VERSION}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase verbosity (use -vv for debug)",
    )

    sub = parser.add_subparsers(dest="subcommand", required=False)

    # play
    p_play = sub.add_parser("play", help="Play interactively")
    p_play.add_argument("--config", help="Path to machine config (JSON or YAML)")
    p_play.add_argument("--cash", help="Starting cash (skips the question)")
    p_play.add_argument("--seed", type=int, help="Seed the reels for a reproducible session")
    p_play.add_argument("--clear", action="store_true", help="Clear the screen before each round")
    p_play.set_defaults(func=_cmd_play)

    # simulate
    p_sim = sub.add_parser("simulate", help="Play many rounds without prompting")
    p_sim.add_argument("--rounds", type=int, required=True, help="Number of rounds to play")
    p_sim.add_argument("--cash", required=True, help="Starting cash")
    p_sim.add_argument("--config", help="Path to machine config (JSON or YAML)")
    p_sim.add_argument("--seed", type=int, help="Seed the reels for reproducibility")
    p_sim.add_argument(
        "--no-stop-on-bankrupt",
        action="store_true",
        help="Keep playing into debt instead of stopping when cash runs out.",
    )
    p_sim.add_argument("--json", action="store_true", help="Print the report as JSON")
    p_sim.set_defaults(func=_cmd_simulate)

    # validate
    p_val = sub.add_parser("validate", help="Validate a machine config file")
    p_val.add_argument("path", help="Path to config file")
    p_val.set_defaults(func=_cmd_validate)

    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except FruitMachineError as e:
        log.debug("command failed", exc_info=True)
        return _fail(str(e))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
