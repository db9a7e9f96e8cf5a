#===============================================================================
#  AppSnap | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Load/save of the persistent settings file (workers, timeouts, sync target...).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "APPSNAP_SYNC_TOKEN": "sync_token",
    "APPSNAP_SYNC_URL": "sync_url",
}


def default_settings() -> Dict[str, Any]:
    return {
        "max_workers": 1,              # >1 renders icons on a thread pool
        "enumeration_timeout": 30.0,   # seconds; 0 disables
        "icon_theme": "",              # QIcon theme for named icons
        "extra_data_dirs": [],         # additional system data dirs
        "sync_url": "",                # backend base URL, empty = no sync
        "sync_token": "",
        "log_level": "INFO",
    }


def _coerce(value: Any, default: Any) -> Any:
    """Bring one value to the type of its default, or None when that is impossible."""
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(default, int):
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        return number if number >= 1 else None
    if isinstance(default, float):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if number >= 0 else None
    if isinstance(default, list):
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return value
        return None
    return value if isinstance(value, str) else None


def validate_settings(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace values of the wrong type or range with their defaults."""
    d = default_settings()
    clean = dict(data)
    for k, default in d.items():
        value = _coerce(clean.get(k, default), default)
        if value is None:
            logger.warning("Invalid setting %s=%r, using %r", k, clean.get(k), default)
            value = default
        clean[k] = value
    return clean


def load_settings(settings_path: Path) -> Dict[str, Any]:
    """Load settings from disk (or defaults), then apply environment overrides."""
    d = default_settings()
    data: Dict[str, Any] = dict(d)
    if settings_path.exists():
        try:
            loaded = json.loads(settings_path.read_text(encoding="utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("settings must be a JSON object")
            for k in d:
                if k in loaded:
                    data[k] = loaded[k]
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", settings_path, e)
            data = dict(d)

    for env_key, setting in ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            data[setting] = value
    return validate_settings(data)


def save_settings(settings_path: Path, settings: Dict[str, Any]) -> None:
    """Persist settings to disk."""
    settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
