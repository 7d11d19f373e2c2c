from __future__ import annotations

import logging
import math
from typing import Callable, Literal, Optional

from .errors import OverrideAlreadyInstalled
from .host import AuctionHost, Clock
from .ingest import batch_is_complete, ingest_page, read_batch
from .types import ScanSession

log = logging.getLogger(__name__)

DEFAULT_ITEMS_PER_PAGE = 50

ReadinessPredicate = Callable[[], bool]
GateDecision = Literal["pending", "loading", "advance", "last_page"]


def total_pages_for(total_reported: int, items_per_page: int) -> int:
    if total_reported <= 0:
        return 0
    return math.ceil(total_reported / items_per_page)


class QueryGate:
    """
    Stands in for the host's readiness predicate while a scan runs.

    The original predicate is kept so it can be restored, and so the poll that
    sees the last page can hand the host its real answer.
    """

    def __init__(
        self,
        host: AuctionHost,
        clock: Clock,
        *,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be >= 1")
        self._host = host
        self._clock = clock
        self.items_per_page = items_per_page
        self._original: Optional[ReadinessPredicate] = None

    @property
    def installed(self) -> bool:
        return self._original is not None

    @property
    def original(self) -> Optional[ReadinessPredicate]:
        return self._original

    def install(self, original: ReadinessPredicate) -> None:
        if self._original is not None:
            raise OverrideAlreadyInstalled("readiness predicate override is already installed")
        self._original = original
        log.debug("readiness override installed")

    def uninstall(self) -> Optional[ReadinessPredicate]:
        original, self._original = self._original, None
        if original is not None:
            log.debug("readiness override removed")
        return original

    def poll(self, session: ScanSession) -> GateDecision:
        count, total_reported = self._host.get_available_batch()
        if total_reported == 0:
            return "pending"

        entries = read_batch(self._host, count)
        if not batch_is_complete(entries):
            return "loading"

        added = ingest_page(
            session,
            entries,
            total_reported,
            captured_at=self._clock.now(),
        )
        session.total_pages = total_pages_for(total_reported, self.items_per_page)
        log.debug(
            "page %d/%d ingested: %d records (reported total %d)",
            session.current_page + 1,
            session.total_pages,
            added,
            total_reported,
        )

        if session.current_page < session.total_pages - 1:
            session.current_page += 1
            self._host.issue_query(session.current_page)
            return "advance"
        return "last_page"
