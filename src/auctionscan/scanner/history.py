from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from .host import KeyValueStore
from .types import ScanHistoryEntry

log = logging.getLogger(__name__)

HISTORY_CAPACITY = 10
HISTORY_KEY = "scanHistory"


class HistoryStore:
    """
    Completed scans in insertion order, oldest first, never more than
    ``capacity`` of them.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        *,
        capacity: int = HISTORY_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._storage = storage
        self.capacity = capacity
        self._entries: List[ScanHistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScanHistoryEntry]:
        return iter(list(self._entries))

    def entries(self) -> List[ScanHistoryEntry]:
        return list(self._entries)

    def load(self) -> None:
        if self._storage is None:
            return
        raw = self._storage.load(HISTORY_KEY)
        if not isinstance(raw, list):
            self._entries = []
            self._persist()
            return

        entries = []
        for item in raw:
            entry = ScanHistoryEntry.from_payload(item)
            if entry is None:
                log.warning("skipping malformed scan history entry")
                continue
            entries.append(entry)
        self._entries = entries[-self.capacity :]

    def append(self, entry: ScanHistoryEntry) -> None:
        self._entries.append(entry)
        while len(self._entries) > self.capacity:
            self._entries.pop(0)
        self._persist()

    def clear(self) -> None:
        self._entries = []
        self._persist()

    def stats(self) -> Tuple[int, int]:
        return len(self._entries), sum(entry.item_count for entry in self._entries)

    def _persist(self) -> None:
        if self._storage is None:
            return
        self._storage.persist(HISTORY_KEY, [entry.to_payload() for entry in self._entries])
