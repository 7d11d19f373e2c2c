from __future__ import annotations

from dataclasses import replace

from ..config import ScanSettings, config_path, load_scan_settings, reset_scan_settings, save_scan_settings


def _format_settings(settings: ScanSettings) -> list[str]:
    progress_label = "On" if settings.show_progress else "Off"
    return [
        f"Items per page: {settings.items_per_page}",
        f"Poll interval: {settings.poll_interval_ms}ms",
        f"Query latency (polls): {settings.query_latency_polls}",
        f"Seller name latency (polls): {settings.owner_latency_polls}",
        f"Query throttle (polls): {settings.query_throttle_polls}",
        f"Live progress panel: {progress_label}",
    ]


def _prompt_int(prompt: str, *, min_value: int) -> int:
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Please enter a whole number.")
            continue
        if value < min_value:
            print(f"Please enter a value >= {min_value}.")
            continue
        return value


def main(argv=None) -> int:
    _ = argv
    while True:
        settings = load_scan_settings()
        print("\nScan Configuration (persists across sessions)\n")
        for idx, line in enumerate(_format_settings(settings), start=1):
            print(f"  {idx}) {line}")
        print("  7) Reset all to defaults")
        print("  b) Back\n")
        print(f"Config file: {config_path()}\n")

        choice = input("Select an option: ").strip().lower()
        if choice == "b":
            return 0

        if choice == "1":
            value = _prompt_int("Listings per result page: ", min_value=1)
            save_scan_settings(replace(settings, items_per_page=value))
            continue

        if choice == "2":
            value = _prompt_int("Poll interval (ms): ", min_value=0)
            save_scan_settings(replace(settings, poll_interval_ms=value))
            continue

        if choice == "3":
            value = _prompt_int("Polls before a page appears: ", min_value=0)
            save_scan_settings(replace(settings, query_latency_polls=value))
            continue

        if choice == "4":
            value = _prompt_int("Polls before seller names appear: ", min_value=0)
            save_scan_settings(replace(settings, owner_latency_polls=value))
            continue

        if choice == "5":
            value = _prompt_int("Polls to refuse queries after each query: ", min_value=0)
            save_scan_settings(replace(settings, query_throttle_polls=value))
            continue

        if choice == "6":
            save_scan_settings(replace(settings, show_progress=not settings.show_progress))
            continue

        if choice == "7":
            reset_scan_settings()
            continue

        print("Invalid choice.")
