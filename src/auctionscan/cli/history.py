from __future__ import annotations

import argparse
from typing import Iterable, Optional

from rich.console import Console

from ..host.simulated import SimulatedAuctionHouse
from ..scanner.commands import handle_command
from ..scanner.controller import ScanController
from ..scanner.history import HistoryStore
from ..scanner.messages import ChatPrinter
from ..scanner.report import render_history
from ..store.saved_variables import SavedVariables, load_icon_position


def open_history(store: Optional[SavedVariables] = None, *, load: bool = True) -> HistoryStore:
    store = store or SavedVariables()
    load_icon_position(store)
    history = HistoryStore(store)
    if load:
        history.load()
    return history


def _non_negative_int_arg(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return parsed


def run_command(text: str, console: Optional[Console] = None) -> int:
    """
    Run one chat command outside of a scan. There is no auctioneer here, so
    ``scan`` is refused the same way the game client would refuse it.
    """
    messenger = ChatPrinter(console=console)
    host = SimulatedAuctionHouse([], venue_open=False)
    controller = ScanController(host, messenger, history=open_history())
    handle_command(controller, messenger, text)
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="auctionscan history",
        description="Show stored auction scans.",
    )
    parser.add_argument(
        "--limit",
        type=_non_negative_int_arg,
        default=None,
        help="Only show the most recent N scans.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    entries = open_history().entries()
    if args.limit is not None:
        entries = entries[-args.limit :] if args.limit else []
    render_history(entries, Console())
    return 0
