#===============================================================================
#  AppSnap  |  Installed Applications Snapshot
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Produces a snapshot of the user-installed (non-system) applications on this
#  machine, each paired with its display name and a PNG data URI of its icon,
#  and prints it as JSON for a host UI.
#  Supports:
#    - freedesktop.org .desktop registries (user apps vs. system apps)
#    - Demo mode with a fixed set of well-known apps (--demo)
#    - Optional upload of the snapshot to a backend (--sync / sync_url)
#    - Persistent settings (appsnap_settings.json)
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project may use third-party libraries (e.g., PySide6, requests) which
#  are licensed separately by their respective authors. Ensure compliance with
#  their license terms when distributing this software.
#===============================================================================

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtGui import QGuiApplication

from appsnap.bridge import get_installed_apps
from appsnap.constants import APP_TITLE, LOGS_DIR_NAME, SETTINGS_FILE_NAME
from appsnap.errors import SyncError
from appsnap.registry import DesktopEntryRegistry, RegistryContext, apply_icon_theme, demo_registry
from appsnap.settings import default_settings, load_settings, save_settings
from appsnap.sync import sync_with_backend

logger = logging.getLogger("appsnap")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="appsnap", description=f"{APP_TITLE}: list installed apps with icons as JSON.")
    p.add_argument("--demo", action="store_true", help="use the built-in demo apps instead of the real registry")
    p.add_argument("--settings", type=Path, default=None, help=f"settings file (default: ./{SETTINGS_FILE_NAME})")
    p.add_argument("--output", "-o", type=Path, default=None, help="write JSON here instead of stdout")
    p.add_argument("--workers", type=int, default=None, help="icon worker threads (overrides settings)")
    p.add_argument("--sync", dest="sync_url", default=None, help="backend base URL to upload the snapshot to")
    p.add_argument("--token", default=None, help="bearer token for --sync")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    return p.parse_args(argv)


def configure_logging(level: str, base_dir: Path) -> None:
    """Console logging on stderr plus a persistent log under .appsnap/logs."""
    logs_dir = base_dir / LOGS_DIR_NAME / "logs"
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logs_dir / "appsnap.log", encoding="utf-8"))
    except OSError:
        pass  # read-only install dir: console only
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def ensure_gui_application() -> QGuiApplication:
    """Qt painting and theme icons need a QGuiApplication; run headless when there is no display."""
    app = QGuiApplication.instance()
    if app is not None:
        return app
    if sys.platform.startswith("linux") and not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QGuiApplication(sys.argv[:1])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    base_dir = Path(__file__).resolve().parent
    settings_path = args.settings or base_dir / SETTINGS_FILE_NAME
    settings = load_settings(settings_path)
    configure_logging(args.log_level or settings["log_level"], base_dir)
    if not settings_path.exists():
        # First run: leave an editable settings file behind
        try:
            save_settings(settings_path, default_settings())
            logger.info("Wrote default settings to %s", settings_path)
        except OSError as e:
            logger.warning("Could not write %s: %s", settings_path, e)

    _app = ensure_gui_application()

    registry = demo_registry() if args.demo else DesktopEntryRegistry()
    context = RegistryContext.from_environment(
        extra_data_dirs=settings["extra_data_dirs"],
        icon_theme=settings["icon_theme"],
    )
    apply_icon_theme(context)
    workers = args.workers if args.workers is not None else settings["max_workers"]
    response = get_installed_apps(
        registry,
        context,
        timeout=settings["enumeration_timeout"] or None,
        max_workers=workers,
    )

    text = json.dumps(response.to_dict(), indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
    else:
        print(text)

    if not response.ok:
        return 1

    url = args.sync_url or settings["sync_url"]
    if url:
        try:
            result = sync_with_backend(response.apps, url, token=args.token or settings["sync_token"])
        except SyncError as e:
            logger.error("Sync failed: %s", e)
            return 2
        logger.info("Synced: %d new, %d removed", result.new_apps_count, result.removed_apps_count)
        if result.new_packages:
            logger.info("New on backend: %s", ", ".join(result.new_packages))
    return 0


if __name__ == "__main__":
    sys.exit(main())
