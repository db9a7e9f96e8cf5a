#===============================================================================
#  AppSnap | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Central place for icon sizing, encoding format, and file/folder naming conventions.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtCore import QSize

APP_TITLE = "AppSnap"
SETTINGS_FILE_NAME = "appsnap_settings.json"
LOGS_DIR_NAME = ".appsnap"

# Fallback canvas for renderable icons without usable intrinsic dimensions
DEFAULT_ICON_SIZE = QSize(96, 96)

# --- Encoding ---
PNG_FORMAT = "PNG"
PNG_QUALITY = 100
PNG_MIME_TYPE = "image/png"
DATA_URI_PREFIX = f"data:{PNG_MIME_TYPE};base64,"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# --- Desktop entries (freedesktop.org) ---
DESKTOP_ENTRY_SECTION = "Desktop Entry"
DESKTOP_FILE_SUFFIX = ".desktop"
ICON_FILE_SUFFIXES = (".png", ".svg", ".svgz", ".xpm")
RENDERABLE_SUFFIXES = (".svg", ".svgz")

# Bridge error code reported for enumeration-level failures
BRIDGE_ERROR_CODE = "ERROR"

SYNC_ENDPOINT = "/api/apps/sync"
