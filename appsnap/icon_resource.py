#===============================================================================
#  AppSnap | icon_resource.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Icon resources as handed out by a registry. Exactly two shapes exist:
#    - RasterIcon     : already a fixed raster (QImage), used as-is
#    - RenderableIcon : a graphic with intrinsic dimensions that must be painted
#                       onto a canvas (SVG, theme icons, procedural drawings)
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from PySide6.QtCore import QByteArray, QRect, QRectF, QSize
from PySide6.QtGui import QIcon, QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from .constants import RENDERABLE_SUFFIXES
from .errors import IconResolutionError, NormalizationError

PaintFn = Callable[[QPainter, QRect], None]


@dataclass(frozen=True)
class RasterIcon:
    image: QImage


@dataclass(frozen=True)
class RenderableIcon:
    """A graphic that draws itself into the given bounds.

    intrinsic_size may be invalid (Qt reports (-1, -1)) when the source has no
    natural size; the normalizer substitutes its default in that case.
    gui_thread_only marks graphics that create QPixmaps while painting (QIcon);
    those must be rendered on the thread that owns the QGuiApplication.
    """
    intrinsic_size: QSize
    paint: PaintFn
    gui_thread_only: bool = False


IconResource = Union[RasterIcon, RenderableIcon]


def svg_icon(source: Union[str, Path, bytes]) -> RenderableIcon:
    """Wrap an SVG file path or SVG document bytes."""
    renderer = QSvgRenderer()
    if isinstance(source, bytes):
        renderer.load(QByteArray(source))
    else:
        renderer.load(str(source))

    def _paint(painter: QPainter, bounds: QRect) -> None:
        if not renderer.isValid():
            raise NormalizationError("SVG document could not be parsed")
        renderer.render(painter, QRectF(bounds))

    size = renderer.defaultSize() if renderer.isValid() else QSize()
    return RenderableIcon(intrinsic_size=size, paint=_paint)


def qicon_icon(icon: QIcon) -> RenderableIcon:
    """Wrap a QIcon (e.g. a theme icon). Its largest available size is intrinsic."""
    sizes = list(icon.availableSizes())
    size = max(sizes, key=lambda s: s.width() * s.height()) if sizes else QSize()

    def _paint(painter: QPainter, bounds: QRect) -> None:
        if icon.isNull():
            raise NormalizationError("icon has no pixmaps to paint")
        icon.paint(painter, bounds)

    return RenderableIcon(intrinsic_size=size, paint=_paint, gui_thread_only=True)


def needs_gui_thread(resource) -> bool:
    return isinstance(resource, RenderableIcon) and resource.gui_thread_only


def load_icon_file(path: Path) -> IconResource:
    """Load an icon from disk. SVG stays renderable, everything else is a raster."""
    if not path.is_file():
        raise IconResolutionError(f"icon file not found: {path}")

    if path.suffix.lower() in RENDERABLE_SUFFIXES:
        return svg_icon(path)

    image = QImage(str(path))
    if image.isNull():
        raise IconResolutionError(f"unreadable image: {path}")
    return RasterIcon(image)
