#===============================================================================
#  AppSnap | encoder.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  PNG + base64 serialization of rasters, and the data URI formatting step.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtCore import QBuffer, QByteArray, QIODevice

from .constants import PNG_FORMAT, PNG_MIME_TYPE, PNG_QUALITY
from .errors import EncodingError
from .models import EncodedImage, RasterBitmap
from .results import Err, Ok, Result


def png_bytes(bitmap: RasterBitmap) -> bytes:
    """Compress a raster to PNG. Raises EncodingError when Qt refuses to write it."""
    buffer = QBuffer()
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise EncodingError("could not open in-memory buffer")
    try:
        if not bitmap.image.save(buffer, PNG_FORMAT, PNG_QUALITY):
            raise EncodingError("PNG writer rejected the image")
        return buffer.data().data()
    finally:
        buffer.close()


def encode(bitmap: RasterBitmap) -> Result[EncodedImage, EncodingError]:
    if not bitmap.is_valid():
        return Err(EncodingError(f"invalid raster {bitmap.width}x{bitmap.height}"))
    try:
        raw = png_bytes(bitmap)
    except EncodingError as e:
        return Err(e)

    # QByteArray.toBase64 emits a single line
    payload = QByteArray(raw).toBase64().data().decode("ascii")
    return Ok(EncodedImage(payload=payload, mime_type=PNG_MIME_TYPE))


def data_uri(image: EncodedImage) -> str:
    return image.data_uri()
