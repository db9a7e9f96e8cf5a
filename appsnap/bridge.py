#===============================================================================
#  AppSnap | bridge.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  The single request/response operation exposed to a host UI. The caller
#  gets either the full list (some icons possibly null) or one error; never both.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import BRIDGE_ERROR_CODE
from .errors import EnumerationError
from .models import ApplicationRecord, InstalledApp
from .registry import ApplicationRegistry, RegistryContext
from .results import Err, Ok, Result
from .snapshot import build_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BridgeResponse:
    ok: bool
    apps: List[ApplicationRecord] = field(default_factory=list)
    code: str = ""
    message: str = ""

    @classmethod
    def resolve(cls, apps: List[ApplicationRecord]) -> "BridgeResponse":
        return cls(ok=True, apps=apps)

    @classmethod
    def reject(cls, message: str, code: str = BRIDGE_ERROR_CODE) -> "BridgeResponse":
        return cls(ok=False, code=code, message=message)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "apps": [r.to_bridge() for r in self.apps]}
        return {"ok": False, "code": self.code, "message": self.message}


def _enumerate(registry: ApplicationRegistry, context: RegistryContext) -> List[InstalledApp]:
    try:
        return list(registry.list_installed_applications(context))
    except EnumerationError:
        raise
    except Exception as e:
        raise EnumerationError(str(e)) from e


def list_with_timeout(
    registry: ApplicationRegistry,
    context: RegistryContext,
    timeout: Optional[float] = None,
) -> List[InstalledApp]:
    """Enumerate applications, turning any failure (including a timeout) into EnumerationError.

    With a timeout the registry runs on a daemon thread, so a call that never
    returns is abandoned and cannot keep the process alive.
    """
    if not timeout:
        return _enumerate(registry, context)

    answers: "queue.Queue[Result[List[InstalledApp], EnumerationError]]" = queue.Queue(maxsize=1)

    def _run() -> None:
        try:
            answers.put(Ok(_enumerate(registry, context)))
        except EnumerationError as e:
            answers.put(Err(e))

    threading.Thread(target=_run, name="appsnap-enum", daemon=True).start()
    try:
        answer = answers.get(timeout=timeout)
    except queue.Empty as e:
        raise EnumerationError(f"application registry did not answer within {timeout:g}s") from e
    return answer.unwrap()


def get_installed_apps(
    registry: ApplicationRegistry,
    context: RegistryContext,
    timeout: Optional[float] = None,
    max_workers: int = 1,
) -> BridgeResponse:
    try:
        apps = list_with_timeout(registry, context, timeout)
        records = build_snapshot(apps, max_workers=max_workers)
    except EnumerationError as e:
        logger.error("Enumeration failed: %s", e)
        return BridgeResponse.reject(str(e))
    return BridgeResponse.resolve(records)
