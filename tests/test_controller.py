import dataclasses

import pytest

from auctionscan.scanner.controller import (
    INDICATOR_IDLE,
    INDICATOR_LOADING,
    INDICATOR_SCANNING,
    MSG_CANCELLED,
    MSG_NO_SCAN,
    MSG_NOT_AT_VENUE,
    MSG_NOT_READY,
    MSG_STARTED,
    ScanController,
)
from auctionscan.scanner.history import HistoryStore
from auctionscan.scanner.progress import ScanProgress
from auctionscan.scanner.types import ScanHistoryEntry


class RecordingProgress(ScanProgress):
    def __init__(self):
        self.started = 0
        self.stopped = 0
        self.snapshots = []
        self.events = []

    def start(self):
        self.started += 1

    def stop(self):
        self.stopped += 1

    def update(self, snapshot):
        self.snapshots.append(snapshot)

    def add_event(self, message, *, style="dim"):
        self.events.append(message)


@pytest.fixture
def controller(host, chat, clock):
    return ScanController(host, chat, clock=clock, history=HistoryStore())


def test_start_requires_visible_venue(controller, host, chat):
    host.venue_visible = False
    assert controller.start() is False
    assert chat.lines == [MSG_NOT_AT_VENUE]
    assert controller.state == "idle"
    assert not controller.override_installed
    assert host.queries == []


def test_start_requires_ready_predicate(controller, host, chat):
    host.ready = False
    assert controller.start() is False
    assert chat.lines == [MSG_NOT_READY]
    assert controller.state == "idle"
    assert host.queries == []


def test_start_issues_first_query(controller, host, chat, clock):
    assert controller.start() is True
    assert controller.state == "scanning"
    assert controller.override_installed
    assert controller.session.started_at == clock.mono
    assert host.queries == [0]
    assert chat.lines == [MSG_STARTED]
    assert controller.indicator == INDICATOR_LOADING


def test_end_to_end_two_pages(controller, host, chat, clock):
    controller.start()

    # Page 0 not populated yet.
    assert controller.can_send_query() is False

    clock.advance(2.0)
    host.load_page(50, 75)
    assert controller.can_send_query() is False
    assert controller.session.items_scanned == 50
    assert controller.session.total_pages == 2
    assert controller.session.current_page == 1
    assert host.queries == [0, 1]
    assert controller.indicator == INDICATOR_SCANNING

    clock.advance(1.0)
    host.load_page(25, 75)
    host.ready = True
    native_calls = host.native_calls
    assert controller.can_send_query() is True
    assert host.native_calls == native_calls + 1

    assert controller.state == "idle"
    assert controller.last_outcome == "completed"
    assert not controller.override_installed
    assert controller.indicator == INDICATOR_IDLE
    entries = controller.history.entries()
    assert len(entries) == 1
    assert entries[0].item_count == 75
    assert len(entries[0].records) == 75
    assert entries[0].elapsed_seconds == pytest.approx(3.0)
    assert entries[0].completed_at == clock.wall
    assert chat.lines[-1].startswith("Scan completed! Found 75 auction items")
    assert controller.session.items_scanned == 0
    assert controller.session.records == []


def test_completion_returns_original_predicate_value(controller, host):
    controller.start()
    host.load_page(10, 10)
    host.ready = False
    assert controller.can_send_query() is False
    assert controller.state == "idle"
    assert len(controller.history) == 1


def test_incomplete_batch_is_not_ingested(controller, host):
    controller.start()
    host.load_page(50, 75, owner=None)
    assert controller.can_send_query() is False
    assert controller.session.items_scanned == 0
    assert controller.session.current_page == 0
    assert host.queries == [0]


def test_without_scan_predicate_is_native(controller, host):
    host.ready = False
    assert controller.can_send_query() is False
    host.ready = True
    assert controller.can_send_query() is True


def test_cancel_while_idle_changes_nothing(controller, host, chat):
    controller.history.append(ScanHistoryEntry(completed_at=1.0, item_count=4, elapsed_seconds=1.0))
    before_session = dataclasses.replace(controller.session, records=list(controller.session.records))
    before_entries = controller.history.entries()

    assert controller.cancel() is False
    assert chat.lines == [MSG_NO_SCAN]
    assert controller.session == before_session
    assert controller.history.entries() == before_entries
    assert controller.last_outcome is None


def test_cancel_resets_without_history(controller, host, chat):
    controller.start()
    host.load_page(50, 120)
    controller.can_send_query()

    assert controller.cancel() is True
    assert chat.lines[-1] == MSG_CANCELLED
    assert controller.state == "idle"
    assert controller.last_outcome == "cancelled"
    assert controller.session.items_scanned == 0
    assert controller.session.current_page == 0
    assert not controller.override_installed
    assert len(controller.history) == 0


def test_venue_closed_cancels_scan(controller, host, chat):
    controller.start()
    controller.on_venue_closed()
    assert controller.state == "idle"
    assert chat.lines[-1] == MSG_CANCELLED


def test_venue_closed_while_idle_is_silent(controller, chat):
    controller.on_venue_closed()
    assert chat.lines == []


def test_second_start_toggles_to_cancel(controller, host, chat):
    assert controller.start() is True
    assert controller.start() is False
    assert controller.state == "idle"
    assert not controller.override_installed
    assert chat.lines == [MSG_STARTED, MSG_CANCELLED]
    assert host.queries == [0]

    # A fresh start after the toggle installs the override again.
    assert controller.activate() is True
    assert controller.override_installed


def test_progress_display_follows_scan(host, chat, clock):
    progress = RecordingProgress()
    controller = ScanController(host, chat, clock=clock, progress=progress)
    controller.start()
    assert progress.started == 1

    clock.advance(10.0)
    host.load_page(50, 100)
    controller.can_send_query()
    snapshot = progress.snapshots[-1]
    assert snapshot.items_scanned == 50
    assert snapshot.percent == 50
    assert snapshot.eta == "10s"

    host.load_page(50, 100)
    controller.can_send_query()
    assert progress.stopped == 1


def test_on_list_update_refreshes_only_while_scanning(host, chat, clock):
    progress = RecordingProgress()
    controller = ScanController(host, chat, clock=clock, progress=progress)
    controller.on_list_update()
    assert progress.snapshots == []
    controller.start()
    count = len(progress.snapshots)
    controller.on_list_update()
    assert len(progress.snapshots) == count + 1


def test_progress_snapshot_while_idle(controller):
    snap = controller.progress_snapshot()
    assert snap.percent == 0
    assert snap.items_scanned == 0
    assert snap.eta == "unknown"


def test_status_lines(controller, host):
    host.venue_visible = False
    assert controller.status_lines() == ["AuctionScan Scanner", "Visit an auctioneer to scan"]

    host.venue_visible = True
    controller.history.append(ScanHistoryEntry(completed_at=1.0, item_count=4, elapsed_seconds=1.0))
    assert controller.status_lines() == [
        "AuctionScan Scanner",
        "Click to start auction scan",
        "Scans in database: 1",
    ]

    controller.start()
    host.load_page(50, 200)
    controller.can_send_query()
    assert controller.status_lines() == [
        "AuctionScan Scanner",
        "Click to cancel scan",
        "Items scanned: 50",
        "Progress: 25%",
    ]


def test_on_load_reports_and_loads_history(controller, chat):
    controller.on_load()
    assert chat.lines[-1].startswith("AuctionScan loaded.")
