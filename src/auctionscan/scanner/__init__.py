from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .controller import ScanController
    from .history import HistoryStore
    from .types import ScanHistoryEntry, ScanRecord

__all__ = ["HistoryStore", "ScanController", "ScanHistoryEntry", "ScanRecord"]


def __getattr__(name: str):
    if name == "ScanController":
        from .controller import ScanController as _scan_controller

        return _scan_controller
    if name == "HistoryStore":
        from .history import HistoryStore as _history_store

        return _history_store
    if name in ("ScanHistoryEntry", "ScanRecord"):
        from . import types as _types

        return getattr(_types, name)
    raise AttributeError(f"module 'auctionscan.scanner' has no attribute {name!r}")
