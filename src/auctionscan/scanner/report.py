from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .reporter import seconds_to_time
from .types import ScanHistoryEntry


def _format_completed_at(value: float) -> str:
    if value <= 0:
        return "?"
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M")


def _format_copper(value: int) -> str:
    """
    Render minor currency units as ``1g 2s 3c``.
    """
    if value <= 0:
        return "-"
    silver_total, copper = divmod(value, 100)
    gold, silver = divmod(silver_total, 100)
    parts = []
    if gold:
        parts.append(f"{gold}g")
    if silver:
        parts.append(f"{silver}s")
    if copper or not parts:
        parts.append(f"{copper}c")
    return " ".join(parts)


def render_history(
    entries: List[ScanHistoryEntry],
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    if not entries:
        console.print("No scans stored.")
        return

    table = Table(
        title="Scan History",
        box=box.SIMPLE_HEAVY,
        show_header=True,
        header_style="bold",
        show_lines=False,
        pad_edge=False,
    )
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Completed", justify="left", style="white", no_wrap=True)
    table.add_column("Items", justify="right", style="white", no_wrap=True)
    table.add_column("Duration", justify="right", style="dim", no_wrap=True)
    table.add_column("Sellers", justify="right", style="dim", no_wrap=True)

    for idx, entry in enumerate(entries, start=1):
        sellers = {record.owner for record in entry.records if record.owner}
        table.add_row(
            str(idx),
            _format_completed_at(entry.completed_at),
            str(entry.item_count),
            seconds_to_time(entry.elapsed_seconds),
            str(len(sellers)),
        )
    console.print(table)


def render_top_items(
    entry: ScanHistoryEntry,
    console: Optional[Console] = None,
    *,
    limit: int = 10,
) -> None:
    """
    Show the most listed items of a single scan with their cheapest buyout.
    """
    console = console or Console()
    counts: Counter = Counter()
    cheapest: dict = {}
    for record in entry.records:
        counts[record.name] += record.count or 1
        if record.buyout_price > 0 and record.count > 0:
            unit = record.buyout_price // record.count
            if record.name not in cheapest or unit < cheapest[record.name]:
                cheapest[record.name] = unit

    table = Table(
        title="Most Listed Items",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
        padding=(0, 1),
    )
    table.add_column("Item", justify="left", style="white", overflow="fold")
    table.add_column("Quantity", justify="right", style="cyan", no_wrap=True)
    table.add_column("Min buyout/unit", justify="right", style="dim", no_wrap=True)
    for name, quantity in counts.most_common(limit):
        table.add_row(name, str(quantity), _format_copper(cheapest.get(name, 0)))
    console.print(table)
