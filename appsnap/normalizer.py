#===============================================================================
#  AppSnap | normalizer.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Turns any icon resource into a raster bitmap.
#    - RasterIcon     -> returned unchanged (no resize, no format conversion)
#    - RenderableIcon -> painted onto a fresh RGBA8888 canvas at its intrinsic
#                        size, 96px substituted for any missing dimension
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from functools import singledispatch

from PySide6.QtCore import QRect, QSize, Qt
from PySide6.QtGui import QImage, QPainter

from .constants import DEFAULT_ICON_SIZE
from .errors import NormalizationError
from .icon_resource import RasterIcon, RenderableIcon
from .models import RasterBitmap
from .results import Err, Ok, Result


def canvas_size(intrinsic: QSize) -> QSize:
    """Resolve the canvas for a renderable; each non-positive dimension falls back to the default."""
    width = intrinsic.width() if intrinsic.width() > 0 else DEFAULT_ICON_SIZE.width()
    height = intrinsic.height() if intrinsic.height() > 0 else DEFAULT_ICON_SIZE.height()
    return QSize(width, height)


@singledispatch
def normalize(resource) -> Result[RasterBitmap, NormalizationError]:
    return Err(NormalizationError(f"unsupported icon resource: {type(resource).__name__}"))


@normalize.register(RasterIcon)
def _(resource: RasterIcon) -> Result[RasterBitmap, NormalizationError]:
    bitmap = RasterBitmap(resource.image)
    if not bitmap.is_valid():
        return Err(NormalizationError("raster icon is empty"))
    return Ok(bitmap)


@normalize.register(RenderableIcon)
def _(resource: RenderableIcon) -> Result[RasterBitmap, NormalizationError]:
    size = canvas_size(resource.intrinsic_size)
    canvas = QImage(size, QImage.Format.Format_RGBA8888)
    if canvas.isNull():
        return Err(NormalizationError(f"could not allocate {size.width()}x{size.height()} canvas"))
    canvas.fill(Qt.GlobalColor.transparent)

    painter = QPainter()
    if not painter.begin(canvas):
        return Err(NormalizationError("painter could not attach to canvas"))
    try:
        resource.paint(painter, QRect(0, 0, size.width(), size.height()))
    except NormalizationError as e:
        return Err(e)
    except Exception as e:
        return Err(NormalizationError(f"rendering failed: {e}"))
    finally:
        painter.end()

    return Ok(RasterBitmap(canvas))
