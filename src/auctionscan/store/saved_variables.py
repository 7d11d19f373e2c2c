from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import saved_variables_path
from ..scanner.types import IconPosition

log = logging.getLogger(__name__)

ICON_POSITION_KEY = "iconPosition"


class SavedVariables:
    """
    Key-value state that survives restarts, kept as one JSON object on disk.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or saved_variables_path()
        self._data: Optional[Dict[str, Any]] = None

    def _read(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data
        try:
            with self.path.open("r", encoding="utf-8") as fp:
                raw = json.load(fp)
        except FileNotFoundError:
            raw = {}
        except (OSError, json.JSONDecodeError) as exc:
            log.warning("ignoring unreadable saved variables %s: %s", self.path, exc)
            raw = {}
        self._data = raw if isinstance(raw, dict) else {}
        return self._data

    def load(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def persist(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fp:
            json.dump(data, fp, indent=2)


def load_icon_position(store: SavedVariables) -> IconPosition:
    raw = store.load(ICON_POSITION_KEY)
    if not isinstance(raw, dict):
        position = IconPosition()
        store.persist(ICON_POSITION_KEY, asdict(position))
        return position

    point = raw.get("point")
    x = raw.get("x")
    y = raw.get("y")
    default = IconPosition()
    return IconPosition(
        point=point if isinstance(point, str) and point else default.point,
        x=x if isinstance(x, int) and not isinstance(x, bool) else default.x,
        y=y if isinstance(y, int) and not isinstance(y, bool) else default.y,
    )


def save_icon_position(store: SavedVariables, position: IconPosition) -> None:
    store.persist(ICON_POSITION_KEY, asdict(position))
