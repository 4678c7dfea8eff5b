# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from flagwatch.app import (
    get_all_states,
    get_national_status,
    get_state_status,
    ingest_email,
    sweep_orders,
)
from flagwatch.config import configure_logging
from flagwatch.domain.ingestion import InboundMessage

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from flagwatch.domain.reconciliation import SweepResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track half-staff flag orders")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Ingest one order email")
    ingest.add_argument("--subject", type=str, required=True, help="Email subject line")
    ingest.add_argument("--sender", type=str, help="Optional sender address, for logging")
    body = ingest.add_mutually_exclusive_group(required=True)
    body.add_argument("--html-file", type=Path, help="File holding the HTML body")
    body.add_argument("--plain-file", type=Path, help="File holding the plain-text body")

    status = subparsers.add_parser("status", help="Show the national or a state flag status")
    status.add_argument("--state", type=str, help="Two-letter state code (default: national)")
    status.add_argument("--now", type=str, help="ISO-8601 timestamp to evaluate at")

    states = subparsers.add_parser("states", help="Show the flag status of every state")
    states.add_argument("--now", type=str, help="ISO-8601 timestamp to evaluate at")

    sweep = subparsers.add_parser("sweep", help="Expire and activate stored orders")
    sweep.add_argument("--now", type=str, help="ISO-8601 timestamp to sweep at")

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _read_message(args: argparse.Namespace) -> InboundMessage:
    path: Path = args.html_file or args.plain_file
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read message body from {path}: {exc}") from exc
    if args.html_file is not None:
        return InboundMessage(subject=args.subject, html=content, sender=args.sender)
    return InboundMessage(subject=args.subject, plain=content, sender=args.sender)


def _sweep_payload(result: SweepResult) -> dict[str, object]:
    return {
        "examined": result.examined,
        "changed": result.changed,
        "changes": [
            {
                "jurisdiction": change.jurisdiction,
                "half_mast": change.half_mast,
                "awaiting_start": change.awaiting_start,
                "reason": change.reason.value,
            }
            for change in result.changes
        ],
    }


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def _run(args: argparse.Namespace, *, now: datetime | None) -> None:
    if args.command == "ingest":
        result = ingest_email(args.message)
        _emit({"result": result.acknowledgement, "jurisdiction": result.jurisdiction})
    elif args.command == "status":
        if args.state:
            flag = get_state_status(args.state, now=now)
            _emit({"code": args.state.strip().upper(), **flag.as_dict()})
        else:
            _emit(get_national_status(now=now).as_dict())
    elif args.command == "states":
        _emit([state.as_dict() for state in get_all_states(now=now)])
    elif args.command == "sweep":
        _emit(_sweep_payload(sweep_orders(now=now)))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    try:
        now = _parse_iso_datetime(parsed_args.now) if getattr(parsed_args, "now", None) else None
        if parsed_args.command == "ingest":
            # read eagerly so a bad path is reported as a usage error
            parsed_args.message = _read_message(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args, now=now)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
