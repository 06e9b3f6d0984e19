#!/usr/bin/env python3
import argparse
import logging
import sys
from typing import Optional

from rich.console import Console

from pfm import (
    ApiConfig,
    LogConfig,
    PfmError,
    PortfolioApiClient,
    StateConfig,
    StateStore,
    __version__,
    set_holding,
    show_total,
    signup,
)
from pfm.log import configure_logging

logger = logging.getLogger("pfm.cli")
console = Console()
err_console = Console(stderr=True)

SET_CURRENCY_KEYWORD = "currency"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pfm", description="Command line client for pfd")
    parser.add_argument("--version", action="version", version=f"pfm {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Sets the level of verbosity (-v info, -vv debug, -vvv trace)",
    )
    parser.add_argument(
        "--api-url",
        default=ApiConfig.BASE_URL,
        help=f"Base URL of the portfolio API (default: {ApiConfig.BASE_URL})",
    )
    parser.add_argument(
        "--state-file",
        default=StateConfig.STATE_FILE,
        help=f"Path of the local state file (default: {StateConfig.STATE_FILE})",
    )

    sub = parser.add_subparsers(dest="command")

    sp = sub.add_parser("signup", help="Creates a new user")
    sp.add_argument("username", help="Should be unique")
    sp.add_argument("password", help="Use strong passwords")

    sp = sub.add_parser(
        "set",
        help="Sets asset",
        usage="%(prog)s [currency] symbol amount",
    )
    sp.add_argument("symbol", help="Ticker symbol or currency code")
    sp.add_argument("amount", help="How much units you have")
    sp.add_argument("extra", nargs="?", help=argparse.SUPPRESS)

    return parser


def _resolve_set_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> tuple[str, str]:
    """Accept both ``set BTC 1`` and ``set currency BTC 1``."""
    if args.extra is None:
        return args.symbol, args.amount
    if args.symbol != SET_CURRENCY_KEYWORD:
        parser.error(f"set: unexpected argument {args.extra!r}")
    return args.amount, args.extra


def main(
    argv: Optional[list[str]] = None,
    client: Optional[PortfolioApiClient] = None,
) -> int:
    """Entry point for the CLI application. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(LogConfig(verbosity=args.verbose))

    store = StateStore(args.state_file)
    if client is None:
        client = PortfolioApiClient(ApiConfig(BASE_URL=args.api_url))

    try:
        if args.command == "signup":
            signup(args.username, args.password, client=client, store=store, console=console)
        elif args.command == "set":
            symbol, amount = _resolve_set_args(parser, args)
            set_holding(symbol, amount, store=store)
        else:
            show_total(client=client, store=store, console=console)
    except (PfmError, OSError) as e:
        logger.debug("Command %s failed", args.command or "total", exc_info=True)
        err_console.print(
            f"Error: {e}", markup=False, emoji=False, highlight=False, soft_wrap=True
        )
        return 1

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
