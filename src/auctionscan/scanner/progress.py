from __future__ import annotations

from typing import Optional

from rich.console import Console

from .live_ui import _ScanLiveUI
from .types import ProgressSnapshot


class ScanProgress:
    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def update(self, snapshot: ProgressSnapshot) -> None:
        raise NotImplementedError

    def add_event(self, message: str, *, style: str = "dim") -> None:
        raise NotImplementedError


class NullScanProgress(ScanProgress):
    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None

    def update(self, snapshot: ProgressSnapshot) -> None:
        return None

    def add_event(self, message: str, *, style: str = "dim") -> None:
        return None


class RichScanProgress(ScanProgress):
    def __init__(self, console: Optional[Console] = None) -> None:
        self._ui = _ScanLiveUI(console=console)
        self._running = False

    @property
    def console(self) -> Console:
        return self._ui.console

    def start(self) -> None:
        if self._running:
            return
        self._ui.reset()
        self._ui.start()
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        self._ui.stop()
        self._running = False

    def update(self, snapshot: ProgressSnapshot) -> None:
        self._ui.update(snapshot)

    def add_event(self, message: str, *, style: str = "dim") -> None:
        self._ui.add_event(message, style=style)
