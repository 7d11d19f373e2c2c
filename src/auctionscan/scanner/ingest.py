from __future__ import annotations

from typing import List, Sequence

from .host import AuctionHost, RawListing
from .types import ScanRecord, ScanSession


def read_batch(host: AuctionHost, count: int) -> List[RawListing]:
    return [host.get_entry(index) for index in range(count)]


def batch_is_complete(entries: Sequence[RawListing]) -> bool:
    """
    The host fills in the owner last, so a missing owner means the page is
    still loading.
    """
    return all(entry.owner is not None for entry in entries)


def _to_record(entry: RawListing, captured_at: float) -> ScanRecord:
    return ScanRecord(
        name=entry.name or "",
        texture=entry.texture,
        count=entry.count,
        quality=entry.quality,
        can_use=entry.can_use,
        level=entry.level,
        min_bid=entry.min_bid,
        buyout_price=entry.buyout_price,
        bid_amount=entry.bid_amount,
        owner=entry.owner,
        captured_at=captured_at,
    )


def ingest_page(
    session: ScanSession,
    entries: Sequence[RawListing],
    total_reported: int,
    *,
    captured_at: float,
) -> int:
    """
    Append every named, owned entry to the session and return how many were
    taken.
    """
    added = 0
    for entry in entries:
        if entry.name is None or entry.owner is None:
            continue
        session.records.append(_to_record(entry, captured_at))
        session.items_scanned += 1
        added += 1

    # Listings can change between pages; the latest total wins.
    session.total_items_reported = total_reported
    return added
