from __future__ import annotations

from .types import ProgressSnapshot, ScanSession

ETA_UNKNOWN = "unknown"
ETA_ALMOST_DONE = "almost done"


def seconds_to_time(seconds: float) -> str:
    """
    Format a duration as ``1h 2m 3s``, dropping leading zero units.
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def progress_percent(session: ScanSession) -> int:
    if session.total_pages <= 0:
        return 0
    return (session.current_page * 100) // session.total_pages


def estimate_remaining(session: ScanSession, now: float) -> str:
    if session.started_at is None or session.items_scanned <= 0:
        return ETA_UNKNOWN

    elapsed = now - session.started_at
    items_per_second = session.items_scanned / elapsed if elapsed > 0 else 0.0
    if items_per_second > 0 and session.total_items_reported > session.items_scanned:
        remaining_items = session.total_items_reported - session.items_scanned
        return seconds_to_time(remaining_items / items_per_second)
    if session.total_items_reported <= session.items_scanned:
        return ETA_ALMOST_DONE
    return ETA_UNKNOWN


def progress_snapshot(session: ScanSession, now: float) -> ProgressSnapshot:
    elapsed = None if session.started_at is None else max(0.0, now - session.started_at)
    return ProgressSnapshot(
        percent=progress_percent(session),
        items_scanned=session.items_scanned,
        eta=estimate_remaining(session, now),
        current_page=session.current_page,
        total_pages=session.total_pages,
        total_items_reported=session.total_items_reported,
        elapsed_seconds=elapsed,
    )
