import json

import pytest

from auctionscan.host.simulated import (
    SimulatedAuctionHouse,
    SimulatedListing,
    generate_listings,
    load_listings,
    pump,
)
from auctionscan.scanner.controller import ScanController
from auctionscan.scanner.history import HistoryStore


def _listings(count):
    return [SimulatedListing(name=f"Item {idx}", owner="Dagny", buyout_price=idx) for idx in range(count)]


def test_batch_appears_after_latency():
    house = SimulatedAuctionHouse(_listings(60), items_per_page=50, query_latency_polls=2, owner_latency_polls=1)
    house.issue_query(0)
    assert house.get_available_batch() == (0, 0)

    assert house.tick() is False
    assert house.tick() is True
    assert house.get_available_batch() == (50, 60)
    assert house.get_entry(0).owner is None
    assert house.get_entry(0).name == "Item 0"

    assert house.tick() is True
    assert house.get_entry(0).owner == "Dagny"

    house.issue_query(1)
    for _ in range(3):
        house.tick()
    assert house.get_available_batch() == (10, 60)
    assert house.get_entry(9).name == "Item 59"
    assert house.get_entry(10).name is None


def test_throttle_blocks_native_predicate():
    house = SimulatedAuctionHouse(_listings(5), query_throttle_polls=2)
    assert house.can_send_query() is True
    house.issue_query(0)
    assert house.can_send_query() is False
    house.tick()
    house.tick()
    assert house.can_send_query() is True
    house.close()
    assert house.can_send_query() is False
    assert house.is_venue_visible() is False


def test_full_scan_through_pump(chat, clock):
    house = SimulatedAuctionHouse(_listings(237), items_per_page=50, query_latency_polls=1, owner_latency_polls=2)
    controller = ScanController(house, chat, clock=clock, history=HistoryStore(), items_per_page=50)

    assert controller.start() is True
    polls = pump(controller, house, max_polls=200)

    assert polls > 5
    assert controller.last_outcome == "completed"
    assert house.queries == [0, 1, 2, 3, 4]
    entries = controller.history.entries()
    assert entries[-1].item_count == 237
    assert [record.name for record in entries[-1].records][:2] == ["Item 0", "Item 1"]


def test_empty_auction_house_keeps_waiting(chat, clock):
    house = SimulatedAuctionHouse([], query_latency_polls=0, owner_latency_polls=0)
    controller = ScanController(house, chat, clock=clock, history=HistoryStore())
    controller.start()
    # No listings means the reported total stays zero and the page never loads.
    with pytest.raises(TimeoutError):
        pump(controller, house, max_polls=5)
    assert controller.scanning


def test_pump_cancels_when_venue_closes(chat, clock):
    house = SimulatedAuctionHouse(_listings(120), query_latency_polls=1, owner_latency_polls=0)
    controller = ScanController(house, chat, clock=clock, history=HistoryStore())
    controller.start()
    house.close()
    pump(controller, house, max_polls=10)
    assert controller.last_outcome == "cancelled"
    assert len(controller.history) == 0


def test_pump_sleeps_between_polls(chat, clock):
    house = SimulatedAuctionHouse(_listings(10), query_latency_polls=2, owner_latency_polls=0)
    controller = ScanController(house, chat, clock=clock, history=HistoryStore())
    controller.start()
    sleeps = []
    pump(controller, house, poll_interval=0.25, max_polls=10, sleep=sleeps.append)
    assert controller.last_outcome == "completed"
    assert sleeps and all(value == 0.25 for value in sleeps)


def test_generate_listings_is_seeded():
    first = generate_listings(30, seed=7)
    assert first == generate_listings(30, seed=7)
    assert len(first) == 30
    assert all(listing.owner for listing in first)


def test_load_listings_accepts_items_object(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(
        json.dumps({"items": [{"name": "Iron Ore", "owner": "Gunnar", "count": 20, "buyout_price": 5000}]}),
        encoding="utf-8",
    )
    listings = load_listings(path)
    assert listings == [SimulatedListing(name="Iron Ore", owner="Gunnar", count=20, buyout_price=5000)]


@pytest.mark.parametrize(
    "payload",
    [
        {"not": "a list"},
        [{"owner": "Gunnar"}],
        [{"name": "Iron Ore"}],
        [{"name": "Iron Ore", "owner": "Gunnar", "count": -1}],
    ],
)
def test_load_listings_rejects_bad_data(tmp_path, payload):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_listings(path)
