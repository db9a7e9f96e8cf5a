#===============================================================================
#  AppSnap | snapshot.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Builds a snapshot of user (non-system) applications with encoded icons.
#  A broken icon only costs that one application its icon; only a failure to
#  enumerate at all (EnumerationError) escapes.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, List, Optional

from .encoder import encode
from .errors import IconResolutionError
from .icon_resource import IconResource, needs_gui_thread
from .models import ApplicationRecord, EncodedImage, InstalledApp, current_platform
from .normalizer import normalize
from .results import Err, Ok, Result

logger = logging.getLogger(__name__)


def resolve_icon(app: InstalledApp) -> Result[IconResource, IconResolutionError]:
    """Invoke the registry's icon supplier; an exception or a None result both count as unresolved."""
    if app.icon_supplier is None:
        return Err(IconResolutionError("registry supplied no icon", app.package_name))
    try:
        resource = app.icon_supplier()
    except IconResolutionError as e:
        return Err(e.with_package(app.package_name))
    except Exception as e:
        return Err(IconResolutionError(f"icon lookup failed: {e}", app.package_name))

    if resource is None:
        return Err(IconResolutionError("registry returned no icon resource", app.package_name))
    return Ok(resource)


def finish_icon(app: InstalledApp, resolved: Result[IconResource, IconResolutionError]) -> Optional[EncodedImage]:
    """Normalize and encode an already resolved icon; any failure is logged and yields None."""
    result = resolved.and_then(normalize).and_then(encode)
    if isinstance(result, Ok):
        return result.value

    error = result.error.with_package(app.package_name)
    logger.warning("No icon for %s (%s): %s", app.package_name, type(error).__name__, error)
    return None


def icon_for(app: InstalledApp) -> Optional[EncodedImage]:
    return finish_icon(app, resolve_icon(app))


def _guarded(app: InstalledApp, step: Callable[[], Optional[EncodedImage]]) -> Optional[EncodedImage]:
    try:
        return step()
    except Exception:
        # Anything the pipeline did not anticipate still only costs this icon
        logger.exception("Icon pipeline crashed for %s", app.package_name)
        return None


def _icons_in_pool(apps: List[InstalledApp], max_workers: int) -> List[Optional[EncodedImage]]:
    """Registry lookups and QIcon rendering stay on the calling thread; the rest goes to the pool."""
    resolved = [resolve_icon(app) for app in apps]
    icons: List[Optional[EncodedImage]] = [None] * len(apps)

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="appsnap-icon") as pool:
        futures = {}
        for i, (app, res) in enumerate(zip(apps, resolved)):
            if isinstance(res, Ok) and needs_gui_thread(res.value):
                continue
            futures[i] = pool.submit(_guarded, app, partial(finish_icon, app, res))

        for i, (app, res) in enumerate(zip(apps, resolved)):
            if i not in futures:
                icons[i] = _guarded(app, partial(finish_icon, app, res))

        for i, future in futures.items():
            icons[i] = future.result()
    return icons


def build_snapshot(
    apps: Iterable[InstalledApp],
    max_workers: int = 1,
    platform: Optional[str] = None,
) -> List[ApplicationRecord]:
    """Return one record per non-system app, in the order the registry listed them.

    max_workers > 1 spreads normalize/encode over a thread pool; the output
    order is still the input order.
    """
    platform = platform or current_platform()
    user_apps = [app for app in apps if not app.is_system]

    if max_workers <= 1 or len(user_apps) < 2:
        icons = [_guarded(app, partial(icon_for, app)) for app in user_apps]
    else:
        icons = _icons_in_pool(user_apps, max_workers)

    records = [
        ApplicationRecord(package_name=app.package_name, app_name=app.label, icon=icon, platform=platform)
        for app, icon in zip(user_apps, icons)
    ]
    missing = sum(1 for r in records if r.icon is None)
    logger.info("Snapshot built: %d apps, %d without icon", len(records), missing)
    return records
