from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from ..config import load_scan_settings
from ..host.simulated import SimulatedAuctionHouse, generate_listings, load_listings, pump
from ..scanner.controller import ScanController
from ..scanner.messages import ChatPrinter
from ..scanner.progress import NullScanProgress, RichScanProgress, ScanProgress
from ..scanner.report import render_top_items
from .history import open_history

log = logging.getLogger(__name__)

DEFAULT_DEMO_LISTINGS = 237


def _positive_int_arg(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return parsed


def _non_negative_int_arg(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    settings = load_scan_settings()

    parser = argparse.ArgumentParser(
        prog="auctionscan scan",
        description="Scan every page of a simulated auction house.",
    )
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--listings",
        type=Path,
        default=None,
        help="JSON file with the listings the auction house should serve.",
    )
    source_group.add_argument(
        "--demo",
        type=_positive_int_arg,
        default=DEFAULT_DEMO_LISTINGS,
        help=f"Number of generated listings when no file is given (default {DEFAULT_DEMO_LISTINGS}).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated listings.")
    parser.add_argument(
        "--items-per-page",
        type=_positive_int_arg,
        default=settings.items_per_page,
        help="Listings per result page.",
    )
    parser.add_argument(
        "--poll-interval-ms",
        type=_non_negative_int_arg,
        default=settings.poll_interval_ms,
        help="Delay between readiness checks.",
    )
    parser.add_argument(
        "--query-latency",
        type=_non_negative_int_arg,
        default=settings.query_latency_polls,
        help="Polls before a queried page appears.",
    )
    parser.add_argument(
        "--owner-latency",
        type=_non_negative_int_arg,
        default=settings.owner_latency_polls,
        help="Further polls before seller names are filled in.",
    )
    parser.add_argument(
        "--throttle",
        type=_non_negative_int_arg,
        default=settings.query_throttle_polls,
        help="Polls after a query during which the client refuses new ones.",
    )

    progress_group = parser.add_mutually_exclusive_group()
    progress_group.add_argument(
        "--progress",
        dest="show_progress",
        action="store_true",
        help="Show the live progress panel.",
    )
    progress_group.add_argument(
        "--no-progress",
        dest="show_progress",
        action="store_false",
        help="Only print chat messages (ignores saved scan configuration).",
    )
    parser.set_defaults(show_progress=settings.show_progress)
    return parser


def _build_progress_impl(show_progress: bool, console: Console) -> ScanProgress:
    if not show_progress:
        return NullScanProgress()
    return RichScanProgress(console=console)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        if args.listings is not None:
            listings = load_listings(args.listings)
        else:
            listings = generate_listings(args.demo, seed=args.seed)
        host = SimulatedAuctionHouse(
            listings,
            items_per_page=args.items_per_page,
            query_latency_polls=args.query_latency,
            owner_latency_polls=args.owner_latency,
            query_throttle_polls=args.throttle,
        )
    except FileNotFoundError as exc:
        print(f"Error: listings file not found: {exc.filename}")
        return 1
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    if not listings:
        print("Error: no listings to scan")
        return 1

    console = Console()
    progress = _build_progress_impl(args.show_progress, console)
    messenger = ChatPrinter(console=console, progress=progress)
    history = open_history(load=False)
    controller = ScanController(
        host,
        messenger,
        history=history,
        progress=progress,
        items_per_page=args.items_per_page,
    )
    controller.on_load()

    if not controller.start():
        return 1

    try:
        polls = pump(controller, host, poll_interval=args.poll_interval_ms / 1000.0)
    except KeyboardInterrupt:
        host.close()
        controller.on_venue_closed()
        return 0
    except RuntimeError as exc:
        progress.stop()
        print(f"Fatal: {exc}")
        return 1

    log.info("scan loop finished after %d polls", polls)
    if controller.last_outcome == "completed":
        entries = history.entries()
        if entries and entries[-1].records:
            render_top_items(entries[-1], console)
        return 0
    return 1
