#===============================================================================
#  AppSnap | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Shared data models: registry entries, encoded icons and snapshot records.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from PySide6.QtGui import QImage

from .constants import DATA_URI_PREFIX, PNG_MIME_TYPE


def current_platform() -> str:
    """OS family reported alongside each record ("linux" | "windows" | "darwin")."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


@dataclass(frozen=True)
class EncodedImage:
    payload: str                    # base64 PNG bytes, no line breaks
    mime_type: str = PNG_MIME_TYPE

    def data_uri(self) -> str:
        return DATA_URI_PREFIX + self.payload


@dataclass(frozen=True)
class RasterBitmap:
    """A fixed grid of pixels backed by a QImage. Intermediate, never exposed."""
    image: QImage

    @property
    def width(self) -> int:
        return self.image.width()

    @property
    def height(self) -> int:
        return self.image.height()

    def is_valid(self) -> bool:
        return not self.image.isNull() and self.width > 0 and self.height > 0


@dataclass(frozen=True)
class InstalledApp:
    """One application as listed by a registry."""
    package_name: str       # opaque identifier, unique within one listing
    display_name: str
    is_system: bool
    # Resolves the raw icon resource lazily; may raise or return None
    icon_supplier: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)

    @property
    def label(self) -> str:
        return self.display_name or self.package_name


@dataclass(frozen=True)
class ApplicationRecord:
    package_name: str
    app_name: str
    icon: Optional[EncodedImage] = None
    platform: str = field(default_factory=current_platform)

    def to_bridge(self) -> Dict[str, Any]:
        """Serialize for the host UI. appIcon is always present, None when missing."""
        return {
            "packageName": self.package_name,
            "appName": self.app_name,
            "appIcon": self.icon.data_uri() if self.icon else None,
            "platform": self.platform,
        }
