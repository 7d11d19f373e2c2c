from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import PreconditionFailed
from .gate import DEFAULT_ITEMS_PER_PAGE, QueryGate, ReadinessPredicate
from .history import HistoryStore
from .host import AuctionHost, Clock, SystemClock
from .messages import Messenger
from .progress import NullScanProgress, ScanProgress
from .reporter import progress_snapshot
from .types import ProgressSnapshot, ScanHistoryEntry, ScanOutcome, ScanSession, ScanState

log = logging.getLogger(__name__)

ADDON_TITLE = "AuctionScan"

INDICATOR_IDLE = "$"
INDICATOR_LOADING = "..."
INDICATOR_SCANNING = "X"

MSG_LOADED = "AuctionScan loaded. Run 'scan' at an auctioneer to start scanning."
MSG_NOT_AT_VENUE = "You must be at an auctioneer to start scanning."
MSG_NOT_READY = "Cannot query auction house at this time. Please wait and try again."
MSG_STARTED = "Starting auction house scan..."
MSG_CANCELLED = "Auction scan cancelled."
MSG_NO_SCAN = "No scan in progress."


class ScanController:
    """
    Drives a paginated auction house scan from host callbacks.

    The host must consult :meth:`can_send_query` wherever it would use its own
    readiness check. While a scan is running that call ingests fully loaded
    pages, requests the next one and denies every other query.
    """

    def __init__(
        self,
        host: AuctionHost,
        messenger: Messenger,
        *,
        history: Optional[HistoryStore] = None,
        clock: Optional[Clock] = None,
        progress: Optional[ScanProgress] = None,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> None:
        self._host = host
        self._messenger = messenger
        self._clock: Clock = clock or SystemClock()
        self.history = history if history is not None else HistoryStore()
        self.progress: ScanProgress = progress or NullScanProgress()
        self.session = ScanSession()
        self._gate = QueryGate(host, self._clock, items_per_page=items_per_page)
        self.last_outcome: Optional[ScanOutcome] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ScanState:
        return "scanning" if self.session.in_progress else "idle"

    @property
    def scanning(self) -> bool:
        return self.session.in_progress

    @property
    def override_installed(self) -> bool:
        return self._gate.installed

    @property
    def indicator(self) -> str:
        if not self.session.in_progress:
            return INDICATOR_IDLE
        if self.session.items_scanned == 0 and self.session.total_pages == 0:
            return INDICATOR_LOADING
        return INDICATOR_SCANNING

    # ------------------------------------------------------------------
    # Host lifecycle hooks
    # ------------------------------------------------------------------

    def on_load(self) -> None:
        self.history.load()
        self._messenger.print(MSG_LOADED)

    def on_venue_closed(self) -> None:
        if self.session.in_progress:
            log.info("venue closed during scan")
            self._finish("cancelled")

    def on_list_update(self) -> None:
        # Pages are consumed from can_send_query; this only refreshes the display.
        if self.session.in_progress:
            self._refresh_progress()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def activate(self) -> bool:
        """
        Toggle: cancel a running scan, otherwise try to start one. Returns True
        when a scan is running afterwards.
        """
        if self.session.in_progress:
            self.cancel()
            return False
        return self._try_start()

    def start(self) -> bool:
        return self.activate()

    def cancel(self) -> bool:
        if not self.session.in_progress:
            self._messenger.print(MSG_NO_SCAN)
            return False
        self._finish("cancelled")
        return True

    def clear_history(self) -> None:
        self.history.clear()
        log.info("scan history cleared")

    def history_stats(self) -> Tuple[int, int]:
        return self.history.stats()

    # ------------------------------------------------------------------
    # Readiness predicate
    # ------------------------------------------------------------------

    def can_send_query(self) -> bool:
        original = self._gate.original
        if not self.session.in_progress or original is None:
            return (original or self._host.can_send_query)()

        decision = self._gate.poll(self.session)
        if decision in ("pending", "loading"):
            return False

        self._refresh_progress()
        if decision == "advance":
            return False

        restored = self._finish("completed")
        return (restored or self._host.can_send_query)()

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def progress_snapshot(self) -> ProgressSnapshot:
        return progress_snapshot(self.session, self._clock.monotonic())

    def status_lines(self) -> List[str]:
        lines = [f"{ADDON_TITLE} Scanner"]
        session = self.session
        if session.in_progress:
            lines.append("Click to cancel scan")
            lines.append(f"Items scanned: {session.items_scanned}")
            if session.total_items_reported > 0:
                percent = (session.items_scanned * 100) // session.total_items_reported
                lines.append(f"Progress: {percent}%")
            return lines

        if self._host.is_venue_visible():
            lines.append("Click to start auction scan")
        else:
            lines.append("Visit an auctioneer to scan")
        count = len(self.history)
        if count > 0:
            lines.append(f"Scans in database: {count}")
        return lines

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_preconditions(self) -> None:
        if not self._host.is_venue_visible():
            raise PreconditionFailed(MSG_NOT_AT_VENUE)
        if not self._host.can_send_query():
            raise PreconditionFailed(MSG_NOT_READY)

    def _try_start(self) -> bool:
        try:
            self._check_preconditions()
        except PreconditionFailed as exc:
            log.info("scan refused: %s", exc)
            self._messenger.print(str(exc))
            return False

        self._gate.install(self._host.can_send_query)
        session = self.session
        session.reset()
        session.in_progress = True
        session.started_at = self._clock.monotonic()
        self.last_outcome = None

        self.progress.start()
        self._messenger.print(MSG_STARTED)
        log.info("scan started")
        self._host.issue_query(0)
        self._refresh_progress()
        return True

    def _finish(self, outcome: ScanOutcome) -> Optional[ReadinessPredicate]:
        session = self.session
        if outcome == "completed":
            started_at = session.started_at if session.started_at is not None else self._clock.monotonic()
            entry = ScanHistoryEntry(
                completed_at=self._clock.now(),
                item_count=session.items_scanned,
                elapsed_seconds=max(0.0, self._clock.monotonic() - started_at),
                records=tuple(session.records),
            )
            self.history.append(entry)
            message = (
                f"Scan completed! Found {entry.item_count} auction items "
                f"({session.total_items_reported} reported). Data saved to database."
            )
            log.info(
                "scan completed: %d items over %d pages in %.1fs",
                entry.item_count,
                session.total_pages,
                entry.elapsed_seconds,
            )
        else:
            message = MSG_CANCELLED
            log.info("scan cancelled on page %d", session.current_page)

        session.reset()
        restored = self._gate.uninstall()
        self.last_outcome = outcome
        self.progress.stop()
        self._messenger.print(message)
        return restored

    def _refresh_progress(self) -> None:
        self.progress.update(self.progress_snapshot())
