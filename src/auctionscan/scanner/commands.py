from __future__ import annotations

from typing import Tuple

from .controller import MSG_NO_SCAN, ScanController
from .history import HistoryStore
from .messages import Messenger

MSG_CLEARED = "Scan history cleared."

HELP_LINES: Tuple[str, ...] = (
    "Commands:",
    "  scan - Start auction scan",
    "  cancel - Cancel current scan",
    "  stats - Show database statistics",
    "  clear - Clear scan history",
)


def report_stats(history: HistoryStore, messenger: Messenger) -> None:
    count, total_items = history.stats()
    messenger.print(f"Database contains {count} scans with {total_items} total items.")


def print_help(messenger: Messenger) -> None:
    for line in HELP_LINES:
        messenger.print(line)


def handle_command(controller: ScanController, messenger: Messenger, message: str) -> None:
    """
    Dispatch one line typed by the user. Unknown input prints the help.
    """
    msg = (message or "").strip().lower()

    if msg == "scan":
        controller.activate()
    elif msg in ("cancel", "stop"):
        if controller.scanning:
            controller.activate()
        else:
            messenger.print(MSG_NO_SCAN)
    elif msg == "clear":
        controller.clear_history()
        messenger.print(MSG_CLEARED)
    elif msg == "stats":
        report_stats(controller.history, messenger)
    else:
        print_help(messenger)
