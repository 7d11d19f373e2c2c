from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple


@dataclass(frozen=True)
class RawListing:
    """
    A listing slot as reported by the host. Fields are ``None`` until the host
    has loaded them.
    """

    name: Optional[str] = None
    texture: Optional[str] = None
    count: int = 0
    quality: int = 0
    can_use: bool = False
    level: int = 0
    min_bid: int = 0
    min_increment: int = 0
    buyout_price: int = 0
    bid_amount: int = 0
    high_bidder: bool = False
    owner: Optional[str] = None


class AuctionHost(Protocol):
    def is_venue_visible(self) -> bool: ...

    def can_send_query(self) -> bool: ...

    def issue_query(self, page: int) -> None: ...

    def get_available_batch(self) -> Tuple[int, int]: ...

    def get_entry(self, index: int) -> RawListing: ...


class Clock(Protocol):
    def now(self) -> float: ...

    def monotonic(self) -> float: ...


class KeyValueStore(Protocol):
    def load(self, key: str, default: Any = None) -> Any: ...

    def persist(self, key: str, value: Any) -> None: ...


class SystemClock:
    def now(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.perf_counter()
