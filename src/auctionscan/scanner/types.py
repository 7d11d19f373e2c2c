from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

ScanState = Literal["idle", "scanning"]
ScanOutcome = Literal["completed", "cancelled"]


def _coerce_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default


def _coerce_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def _coerce_optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ScanRecord:
    """
    One auction listing captured from a fully loaded page.
    """

    name: str
    texture: Optional[str]
    count: int
    quality: int
    can_use: bool
    level: int
    min_bid: int
    buyout_price: int
    bid_amount: int
    owner: Optional[str]
    captured_at: float

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["ScanRecord"]:
        if not isinstance(raw, dict):
            return None
        name = raw.get("name")
        if not isinstance(name, str):
            return None
        return cls(
            name=name,
            texture=_coerce_optional_str(raw.get("texture")),
            count=_coerce_int(raw.get("count")),
            quality=_coerce_int(raw.get("quality")),
            can_use=raw.get("can_use") is True,
            level=_coerce_int(raw.get("level")),
            min_bid=_coerce_int(raw.get("min_bid")),
            buyout_price=_coerce_int(raw.get("buyout_price")),
            bid_amount=_coerce_int(raw.get("bid_amount")),
            owner=_coerce_optional_str(raw.get("owner")),
            captured_at=_coerce_float(raw.get("captured_at")),
        )


@dataclass
class ScanSession:
    in_progress: bool = False
    started_at: Optional[float] = None
    current_page: int = 0
    total_pages: int = 0
    items_scanned: int = 0
    total_items_reported: int = 0
    records: List[ScanRecord] = field(default_factory=list)

    def reset(self) -> None:
        self.in_progress = False
        self.started_at = None
        self.current_page = 0
        self.total_pages = 0
        self.items_scanned = 0
        self.total_items_reported = 0
        self.records = []


@dataclass(frozen=True)
class ScanHistoryEntry:
    """
    Summary of a finished scan as stored in the history.
    """

    completed_at: float
    item_count: int
    elapsed_seconds: float
    records: Tuple[ScanRecord, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "completed_at": self.completed_at,
            "item_count": self.item_count,
            "elapsed_seconds": self.elapsed_seconds,
            "records": [record.to_payload() for record in self.records],
        }

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["ScanHistoryEntry"]:
        if not isinstance(raw, dict):
            return None
        item_count = raw.get("item_count")
        if isinstance(item_count, bool) or not isinstance(item_count, int):
            return None
        records_raw = raw.get("records")
        if not isinstance(records_raw, list):
            records_raw = []
        records = tuple(
            record
            for record in (ScanRecord.from_payload(item) for item in records_raw)
            if record is not None
        )
        return cls(
            completed_at=_coerce_float(raw.get("completed_at")),
            item_count=item_count,
            elapsed_seconds=_coerce_float(raw.get("elapsed_seconds")),
            records=records,
        )


@dataclass(frozen=True)
class ProgressSnapshot:
    percent: int
    items_scanned: int
    eta: str
    current_page: int = 0
    total_pages: int = 0
    total_items_reported: int = 0
    elapsed_seconds: Optional[float] = None


@dataclass(frozen=True)
class IconPosition:
    point: str = "TOPRIGHT"
    x: int = -50
    y: int = -150
