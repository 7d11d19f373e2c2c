from __future__ import annotations

from typing import List, Tuple

import pytest

from auctionscan.scanner.host import RawListing


class FakeClock:
    def __init__(self, wall: float = 1_700_000_000.0, mono: float = 100.0) -> None:
        self.wall = wall
        self.mono = mono

    def now(self) -> float:
        return self.wall

    def monotonic(self) -> float:
        return self.mono

    def advance(self, seconds: float) -> None:
        self.wall += seconds
        self.mono += seconds


class FakeHost:
    """Host whose buffer is set directly by the test."""

    def __init__(self) -> None:
        self.venue_visible = True
        self.ready = True
        self.queries: List[int] = []
        self.native_calls = 0
        self.entries: List[RawListing] = []
        self.total_reported = 0

    def is_venue_visible(self) -> bool:
        return self.venue_visible

    def can_send_query(self) -> bool:
        self.native_calls += 1
        return self.ready

    def issue_query(self, page: int) -> None:
        self.queries.append(page)
        self.entries = []
        self.total_reported = 0

    def get_available_batch(self) -> Tuple[int, int]:
        return len(self.entries), self.total_reported

    def get_entry(self, index: int) -> RawListing:
        return self.entries[index]

    def load_page(self, count: int, total: int, *, owner: str = "Seller", prefix: str = "Item") -> None:
        self.entries = [
            RawListing(name=f"{prefix} {idx}", count=1, buyout_price=100 + idx, owner=owner)
            for idx in range(count)
        ]
        self.total_reported = total


class ChatLog:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def print(self, message: str) -> None:
        self.lines.append(message)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def chat() -> ChatLog:
    return ChatLog()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("AUCTIONSCAN_HOME", str(tmp_path / "home"))
    return tmp_path / "home"
