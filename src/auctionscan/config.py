from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional


CONFIG_VERSION = 1
APP_CONFIG_DIR_NAME = "AuctionScan"
CONFIG_FILE_NAME = "config.json"
SAVED_VARIABLES_FILE_NAME = "saved_variables.json"
LOG_DIR_NAME = "logs"


@dataclass(frozen=True)
class ScanSettings:
    items_per_page: int = 50
    poll_interval_ms: int = 100
    query_latency_polls: int = 2
    owner_latency_polls: int = 1
    query_throttle_polls: int = 0
    show_progress: bool = True


def _config_dir() -> Path:
    override = os.environ.get("AUCTIONSCAN_HOME")
    if override:
        return Path(override)
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_CONFIG_DIR_NAME
    return Path.home() / f".{APP_CONFIG_DIR_NAME.lower()}"


def config_path() -> Path:
    return _config_dir() / CONFIG_FILE_NAME


def saved_variables_path() -> Path:
    return _config_dir() / SAVED_VARIABLES_FILE_NAME


def log_dir() -> Path:
    return _config_dir() / LOG_DIR_NAME


def _coerce_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None


def _coerce_non_negative_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def _from_raw_scan_settings(raw: Any) -> ScanSettings:
    if not isinstance(raw, dict):
        return ScanSettings()

    items_per_page = _coerce_positive_int(raw.get("items_per_page"))
    if items_per_page is None:
        items_per_page = ScanSettings.items_per_page

    poll_interval_ms = _coerce_non_negative_int(raw.get("poll_interval_ms"))
    if poll_interval_ms is None:
        poll_interval_ms = ScanSettings.poll_interval_ms

    query_latency_polls = _coerce_non_negative_int(raw.get("query_latency_polls"))
    if query_latency_polls is None:
        query_latency_polls = ScanSettings.query_latency_polls

    owner_latency_polls = _coerce_non_negative_int(raw.get("owner_latency_polls"))
    if owner_latency_polls is None:
        owner_latency_polls = ScanSettings.owner_latency_polls

    query_throttle_polls = _coerce_non_negative_int(raw.get("query_throttle_polls"))
    if query_throttle_polls is None:
        query_throttle_polls = ScanSettings.query_throttle_polls

    return ScanSettings(
        items_per_page=items_per_page,
        poll_interval_ms=poll_interval_ms,
        query_latency_polls=query_latency_polls,
        owner_latency_polls=owner_latency_polls,
        query_throttle_polls=query_throttle_polls,
        show_progress=_coerce_bool(raw.get("show_progress"), True),
    )


def load_scan_settings() -> ScanSettings:
    path = config_path()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ScanSettings()
    except (OSError, json.JSONDecodeError):
        return ScanSettings()

    if not isinstance(raw, dict):
        return ScanSettings()

    scan_raw = raw.get("scan")
    return _from_raw_scan_settings(scan_raw)


def save_scan_settings(settings: ScanSettings) -> None:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    payload: Dict[str, Any] = {
        "version": CONFIG_VERSION,
        "scan": asdict(settings),
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def reset_scan_settings() -> None:
    save_scan_settings(ScanSettings())
