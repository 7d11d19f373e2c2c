from __future__ import annotations

import time
from collections import deque
from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.text import Text

from .reporter import seconds_to_time
from .types import ProgressSnapshot

# ---------------------------------------------------------------------------
# Live scan UI
# ---------------------------------------------------------------------------

AUCTIONSCAN_BANNER = "$  AuctionScan  $"


class _ScanLiveUI:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console: Console = console or Console()
        self._events: deque[tuple[Text, Text]] = deque(maxlen=6)
        self._snapshot: Optional[ProgressSnapshot] = None
        self._started = False

        self.progress: Progress = Progress(
            SpinnerColumn(style="cyan"),
            BarColumn(bar_width=None),
            TextColumn("page {task.completed}/{task.total}", style="cyan"),
            TaskProgressColumn(),
            expand=True,
        )
        self._task_id = self.progress.add_task("Scanning", total=None, start=True)

        self._live: Live = Live(
            self._render(),
            console=self.console,
            refresh_per_second=12,
            transient=True,
        )

    def start(self) -> None:
        self._live.start()
        self._started = True

    def stop(self) -> None:
        self._live.stop()
        self._started = False

    def reset(self) -> None:
        self._events.clear()
        self._snapshot = None
        self.progress.reset(self._task_id, total=None, completed=0)

    def update(self, snapshot: ProgressSnapshot) -> None:
        self._snapshot = snapshot
        total = snapshot.total_pages if snapshot.total_pages > 0 else None
        self.progress.update(self._task_id, total=total, completed=snapshot.current_page)
        self.refresh()

    def add_event(self, message: str, style: str = "dim") -> None:
        timestamp = Text(time.strftime("%H:%M:%S"), style="dim")
        line = Text("• ", style="dim")
        line.append(message, style=style)
        self._events.append((timestamp, line))
        self.refresh()

    def refresh(self) -> None:
        if not self._started:
            return
        self._live.update(self._render(), refresh=True)

    def _render_status(self) -> Table:
        table = Table.grid(padding=(0, 1))
        table.add_column("k", style="cyan", justify="right", no_wrap=True)
        table.add_column("v", style="white", justify="left")

        snapshot = self._snapshot
        if snapshot is None:
            table.add_row("Status", "Waiting for first page…")
            return table

        pages = f"{snapshot.current_page + 1}/{snapshot.total_pages}" if snapshot.total_pages else "?"
        table.add_row("Pages", pages)
        table.add_row("Items scanned", str(snapshot.items_scanned))
        if snapshot.total_items_reported:
            table.add_row("Reported", str(snapshot.total_items_reported))
        table.add_row("Progress", f"{snapshot.percent}%")
        table.add_row("Time remaining", snapshot.eta)
        if snapshot.elapsed_seconds is not None:
            table.add_row("Elapsed", seconds_to_time(snapshot.elapsed_seconds))
        return table

    def _render_events(self) -> Table:
        table = Table.grid(expand=True)
        table.add_column(justify="right", width=8, no_wrap=True, style="dim")
        table.add_column(ratio=1, overflow="fold")

        if not self._events:
            table.add_row(Text("--:--:--", style="dim"), Text("—", style="dim"))
            return table

        for timestamp, line in self._events:
            table.add_row(timestamp, line)

        return table

    def _render(self) -> Group:
        header_panel = Panel(
            Align.center(Text(AUCTIONSCAN_BANNER, style="bold green")),
            box=box.ROUNDED,
            padding=(0, 1),
        )

        body = Table.grid(expand=True)
        body.add_column(ratio=1)
        body.add_column(ratio=2)
        body.add_row(
            Panel(self._render_status(), box=box.SIMPLE, title="Status", padding=(0, 1)),
            Panel(self._render_events(), box=box.SIMPLE, title="Events", padding=(0, 1)),
        )

        return Group(
            header_panel,
            body,
            self.progress,
        )
