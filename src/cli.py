"""poker-settle — command line front end

    poker-settle settle ledger.json
    poker-settle settle --share "https://host/#eyJ..." --json
    poker-settle share ledger.json --base-url https://host/
    poker-settle export ledger.json --out-dir exports/

Ledger files are JSON record lists ({id, name, buyIn, cashOut, delta}),
as written by the store or the export command.
"""

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Sequence

from src.ledger import (
    LedgerFormatError,
    PlayerLedger,
    ShareLinkError,
    build_share_url,
    load_from_url,
    write_export,
)
from src.settlement import SettlementConfig, render_report, settle

EXIT_BAD_INPUT = 2


class InputError(Exception):
    """Ledger input missing or unreadable."""
    pass


def _read_ledger(path: str) -> PlayerLedger:
    fp = Path(path)
    if not fp.exists():
        raise InputError(f"ledger not found: {fp}")
    try:
        data = json.loads(fp.read_text(encoding="utf-8"))
        return PlayerLedger.from_records(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, LedgerFormatError) as e:
        raise InputError(f"cannot read ledger {fp}: {e}") from e


def _decimal_arg(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {text!r}")
    if not value.is_finite() or value < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative amount: {text!r}")
    return value


def _cmd_settle(args: argparse.Namespace) -> int:
    if args.share:
        try:
            ledger = load_from_url(args.share)
        except ShareLinkError as e:
            raise InputError(f"error loading from URL: {e}") from e
        if ledger is None:
            raise InputError("share URL carries no ledger data")
    elif args.ledger:
        ledger = _read_ledger(args.ledger)
    else:
        raise InputError("give a ledger file or --share URL")

    config = SettlementConfig(
        minor_unit_digits=args.digits,
        settle_tolerance=args.tolerance,
    )
    result = settle(ledger.to_positions(), config)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_report(result, currency=args.currency, digits=args.digits))
    return 0


def _cmd_share(args: argparse.Namespace) -> int:
    ledger = _read_ledger(args.ledger)
    print(build_share_url(args.base_url, ledger))
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    ledger = _read_ledger(args.ledger)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    print(write_export(ledger, out_dir))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="poker-settle",
        description="Settle poker game results into a minimal set of payments.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("settle", help="compute who pays whom")
    s.add_argument("ledger", nargs="?", help="ledger JSON file")
    s.add_argument("--share", metavar="URL", help="read the ledger from a share link")
    s.add_argument("--json", action="store_true", help="print the result as JSON")
    s.add_argument(
        "--tolerance", type=_decimal_arg, default=SettlementConfig().settle_tolerance,
        help="amounts at or below this count as settled (default: %(default)s)",
    )
    s.add_argument("--digits", type=int, default=2, help="currency minor-unit digits")
    s.add_argument("--currency", default="$", help="currency symbol for the report")
    s.set_defaults(func=_cmd_settle)

    sh = sub.add_parser("share", help="print a share link for a ledger")
    sh.add_argument("ledger", help="ledger JSON file")
    sh.add_argument("--base-url", required=True, help="page URL the fragment is appended to")
    sh.set_defaults(func=_cmd_share)

    ex = sub.add_parser("export", help="write a dated JSON export of a ledger")
    ex.add_argument("ledger", help="ledger JSON file")
    ex.add_argument("--out-dir", default=".", help="target directory")
    ex.set_defaults(func=_cmd_export)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except InputError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ValueError as e:
        # invalid configuration (e.g. --digits out of range)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
