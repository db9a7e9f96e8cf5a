#===============================================================================
#  AppSnap | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Error taxonomy. EnumerationError fails a whole snapshot; the icon pipeline
#  errors only ever cost a single application its icon.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Optional


class AppSnapError(Exception):
    """Base class for all errors raised by appsnap."""


class EnumerationError(AppSnapError):
    """The application registry could not be queried at all."""


class IconPipelineError(AppSnapError):
    """A per-application icon failure. Recoverable: the record keeps no icon."""

    def __init__(self, message: str, package_name: Optional[str] = None):
        super().__init__(message)
        self.package_name = package_name

    def with_package(self, package_name: str) -> "IconPipelineError":
        if self.package_name is None:
            self.package_name = package_name
        return self


class IconResolutionError(IconPipelineError):
    """The registry could not supply an icon resource."""


class NormalizationError(IconPipelineError):
    """An icon resource could not be turned into a raster."""


class EncodingError(IconPipelineError):
    """A valid raster could not be compressed or serialized."""


class SyncError(AppSnapError):
    """Uploading a snapshot to the backend failed."""
