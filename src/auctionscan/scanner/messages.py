from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Protocol

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from .progress import ScanProgress

log = logging.getLogger(__name__)

CHAT_PREFIX = "[AuctionScan]"


class Messenger(Protocol):
    def print(self, message: str) -> None: ...


class ChatPrinter:
    """
    Prints user-facing messages with the add-on prefix, mirroring them into the
    live progress panel when one is attached.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        progress: Optional["ScanProgress"] = None,
    ) -> None:
        self.console = console or Console()
        self.progress = progress

    def print(self, message: str) -> None:
        log.info("chat: %s", message)
        line = Text(CHAT_PREFIX, style="bold green")
        line.append(" ")
        line.append(message)
        self.console.print(line)
        if self.progress is not None:
            self.progress.add_event(message, style="white")
