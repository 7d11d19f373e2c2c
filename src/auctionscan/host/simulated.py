"""
simulated.py

A stand-in for the game client's auction house: it serves listings one page
at a time, takes a few polls to answer a query and fills in seller names a
little later, the way the real client does.
"""

from __future__ import annotations

import json
import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..scanner.host import RawListing

log = logging.getLogger(__name__)

_DEMO_ITEMS = (
    ("Linen Cloth", "INV_Fabric_Linen_01", 1, 20),
    ("Wool Cloth", "INV_Fabric_Wool_01", 1, 45),
    ("Silk Cloth", "INV_Fabric_Silk_01", 1, 120),
    ("Copper Ore", "INV_Ore_Copper_01", 1, 30),
    ("Iron Ore", "INV_Ore_Iron_01", 1, 250),
    ("Peacebloom", "INV_Misc_Flower_02", 1, 15),
    ("Minor Healing Potion", "INV_Potion_49", 1, 40),
    ("Runecloth Bandage", "INV_Misc_Bandage_11", 1, 300),
    ("Arcanite Bar", "INV_Misc_StoneTablet_05", 1, 60000),
    ("Blade of Eternal Darkness", "INV_Sword_20", 4, 450000),
)

_DEMO_SELLERS = ("Aldric", "Brynja", "Corwin", "Dagny", "Elowen", "Faelan", "Gunnar")


@dataclass(frozen=True)
class SimulatedListing:
    name: str
    owner: str
    texture: Optional[str] = None
    count: int = 1
    quality: int = 1
    can_use: bool = True
    level: int = 0
    min_bid: int = 0
    buyout_price: int = 0
    bid_amount: int = 0


def _listing_from_raw(raw: Any) -> SimulatedListing:
    if not isinstance(raw, dict):
        raise ValueError("each listing must be a JSON object")
    name = raw.get("name")
    owner = raw.get("owner")
    if not isinstance(name, str) or not name:
        raise ValueError("listing is missing a name")
    if not isinstance(owner, str) or not owner:
        raise ValueError(f"listing {name!r} is missing an owner")

    def _int(key: str, default: int = 0) -> int:
        value = raw.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"listing {name!r}: {key} must be a non-negative integer")
        return value

    texture = raw.get("texture")
    return SimulatedListing(
        name=name,
        owner=owner,
        texture=texture if isinstance(texture, str) else None,
        count=_int("count", 1),
        quality=_int("quality", 1),
        can_use=raw.get("can_use", True) is not False,
        level=_int("level"),
        min_bid=_int("min_bid"),
        buyout_price=_int("buyout_price"),
        bid_amount=_int("bid_amount"),
    )


def load_listings(path: Path) -> List[SimulatedListing]:
    """
    Read listings from a JSON array, or an object with an ``items`` array.
    """
    with path.open("r", encoding="utf-8") as fp:
        raw = json.load(fp)
    if isinstance(raw, dict):
        raw = raw.get("items")
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of listings")
    return [_listing_from_raw(item) for item in raw]


def generate_listings(count: int, *, seed: Optional[int] = None) -> List[SimulatedListing]:
    if count < 0:
        raise ValueError("count must be >= 0")
    rng = random.Random(seed)
    listings: List[SimulatedListing] = []
    for _ in range(count):
        name, texture, quality, base_price = rng.choice(_DEMO_ITEMS)
        stack = rng.choice((1, 1, 1, 5, 10, 20)) if base_price < 1000 else 1
        buyout = int(base_price * stack * rng.uniform(0.8, 1.6))
        listings.append(
            SimulatedListing(
                name=name,
                owner=rng.choice(_DEMO_SELLERS),
                texture=texture,
                count=stack,
                quality=quality,
                can_use=True,
                level=0,
                min_bid=max(1, int(buyout * 0.7)),
                buyout_price=buyout if rng.random() > 0.1 else 0,
                bid_amount=0,
            )
        )
    return listings


class SimulatedAuctionHouse:
    """
    Implements the host side of the scan controller against an in-memory
    listing set. Call :meth:`tick` once per frame.
    """

    def __init__(
        self,
        listings: Sequence[SimulatedListing],
        *,
        items_per_page: int = 50,
        query_latency_polls: int = 2,
        owner_latency_polls: int = 1,
        query_throttle_polls: int = 0,
        venue_open: bool = True,
    ) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be >= 1")
        if query_latency_polls < 0 or owner_latency_polls < 0 or query_throttle_polls < 0:
            raise ValueError("latency and throttle polls must be >= 0")
        self.listings = list(listings)
        self.items_per_page = items_per_page
        self.query_latency_polls = query_latency_polls
        self.owner_latency_polls = owner_latency_polls
        self.query_throttle_polls = query_throttle_polls
        self.venue_open = venue_open

        self.queries: List[int] = []
        self._page: Optional[int] = None
        self._polls_since_query = 0
        self._batch_visible = False
        self._owners_visible = False

    # -- host surface ------------------------------------------------------

    def is_venue_visible(self) -> bool:
        return self.venue_open

    def can_send_query(self) -> bool:
        if not self.venue_open:
            return False
        if self._page is None:
            return True
        return self._polls_since_query >= self.query_throttle_polls

    def issue_query(self, page: int) -> None:
        log.debug("query issued for page %d", page)
        self.queries.append(page)
        self._page = page
        self._polls_since_query = 0
        self._batch_visible = False
        self._owners_visible = False
        self._refresh_visibility()

    def get_available_batch(self) -> Tuple[int, int]:
        if not self._batch_visible:
            return 0, 0
        return len(self._page_listings()), len(self.listings)

    def get_entry(self, index: int) -> RawListing:
        page_listings = self._page_listings() if self._batch_visible else []
        if index < 0 or index >= len(page_listings):
            return RawListing()
        listing = page_listings[index]
        return RawListing(
            name=listing.name,
            texture=listing.texture,
            count=listing.count,
            quality=listing.quality,
            can_use=listing.can_use,
            level=listing.level,
            min_bid=listing.min_bid,
            buyout_price=listing.buyout_price,
            bid_amount=listing.bid_amount,
            owner=listing.owner if self._owners_visible else None,
        )

    # -- simulation --------------------------------------------------------

    def tick(self) -> bool:
        """
        Advance one poll. Returns True when the visible listing data changed.
        """
        if self._page is None:
            return False
        before = (self._batch_visible, self._owners_visible)
        self._polls_since_query += 1
        self._refresh_visibility()
        return (self._batch_visible, self._owners_visible) != before

    def close(self) -> None:
        self.venue_open = False

    def _refresh_visibility(self) -> None:
        polls = self._polls_since_query
        self._batch_visible = polls >= self.query_latency_polls
        self._owners_visible = self._batch_visible and (
            polls >= self.query_latency_polls + self.owner_latency_polls
        )

    def _page_listings(self) -> List[SimulatedListing]:
        if self._page is None:
            return []
        start = self._page * self.items_per_page
        return self.listings[start : start + self.items_per_page]


def pump(
    controller: Any,
    host: SimulatedAuctionHouse,
    *,
    poll_interval: float = 0.0,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Run the host's frame loop until the controller leaves the scanning state.
    Returns the number of polls made.
    """
    polls = 0
    while controller.scanning:
        if max_polls is not None and polls >= max_polls:
            raise TimeoutError(f"scan did not finish within {max_polls} polls")
        if not host.venue_open:
            controller.on_venue_closed()
            break
        if host.tick():
            controller.on_list_update()
        controller.can_send_query()
        polls += 1
        if poll_interval > 0 and controller.scanning:
            sleep(poll_interval)
    return polls
