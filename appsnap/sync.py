#===============================================================================
#  AppSnap | sync.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Uploads a snapshot to a backend (POST /api/apps/sync). The backend adds
#  packages it has not seen and drops the ones missing from the upload.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import requests

from .constants import SYNC_ENDPOINT
from .errors import SyncError
from .models import ApplicationRecord


@dataclass(frozen=True)
class SyncResult:
    new_apps_count: int
    removed_apps_count: int
    message: str = ""
    new_packages: List[str] = field(default_factory=list)


def sync_url(base_url: str) -> str:
    return base_url.rstrip("/") + SYNC_ENDPOINT


def sync_with_backend(
    records: Sequence[ApplicationRecord],
    base_url: str,
    token: Optional[str] = None,
    timeout: float = 30,
    session: Optional[requests.Session] = None,
) -> SyncResult:
    """Send the snapshot; raise SyncError on transport errors or a non-2xx answer."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    http = session or requests
    payload = {"apps": [r.to_bridge() for r in records]}
    try:
        r = http.post(sync_url(base_url), json=payload, headers=headers, timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise SyncError(f"backend rejected sync: {e}") from e
    except requests.exceptions.RequestException as e:
        raise SyncError(f"backend unreachable: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        raise SyncError(f"backend sent invalid JSON: {e}") from e

    return SyncResult(
        new_apps_count=int(data.get("newAppsCount", 0)),
        removed_apps_count=int(data.get("removedAppsCount", 0)),
        message=str(data.get("message", "")),
        new_packages=[a.get("packageName", "") for a in data.get("newApps", [])],
    )
