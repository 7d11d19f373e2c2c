from __future__ import annotations

import sys

from .cli import config as config_cli
from .cli import history as history_cli
from .cli import scan as scan_cli
from .logging_config import get_logger


def main(argv=None) -> int:
    log = get_logger("auctionscan")
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _menu()

    cmd, *rest = args
    cmd = cmd.lower().strip()
    log.debug("command %s %s", cmd, rest)

    if cmd == "scan":
        return scan_cli.main(rest)
    if cmd == "history":
        return history_cli.main(rest)
    if cmd in {"config", "settings"}:
        return config_cli.main(rest)

    # stats, clear, cancel/stop and anything unknown (help) go to the chat commands.
    return history_cli.run_command(" ".join(args))


def _menu() -> int:
    while True:
        print("AuctionScan\n")
        print("  1) Scan auction house (demo listings)")
        print("  2) Show scan history")
        print("  3) Database statistics")
        print("  4) Clear scan history")
        print("  5) Scan configuration")
        print("  q) Quit\n")

        choice = input("Select an option: ").strip().lower()
        if choice == "1":
            return scan_cli.main([])
        if choice == "2":
            return history_cli.main([])
        if choice == "3":
            return history_cli.run_command("stats")
        if choice == "4":
            return history_cli.run_command("clear")
        if choice == "5":
            return config_cli.main([])
        if choice in {"q", "quit", "exit"}:
            return 0

        print("\nInvalid choice. Please try again.\n")


if __name__ == "__main__":
    raise SystemExit(main())
