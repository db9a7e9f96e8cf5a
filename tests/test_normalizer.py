"""Tests for icon normalization."""

import pytest
from PySide6.QtCore import QRect, QSize
from PySide6.QtGui import QColor, QImage, QPainter

from appsnap.errors import IconResolutionError, NormalizationError
from appsnap.icon_resource import RasterIcon, RenderableIcon, load_icon_file, svg_icon
from appsnap.normalizer import canvas_size, normalize
from appsnap.results import Err, Ok


def fill_red(painter: QPainter, bounds: QRect) -> None:
    painter.fillRect(bounds, QColor("red"))


class TestRasterIcons:

    def test_raster_is_returned_unchanged(self, raster_48: QImage) -> None:
        """An already-raster icon keeps its size and its pixels."""
        result = normalize(RasterIcon(raster_48))

        assert isinstance(result, Ok)
        assert result.value.width == 48
        assert result.value.height == 48
        assert result.value.image is raster_48
        assert result.value.image.format() == raster_48.format()

    def test_null_raster_is_an_error(self) -> None:
        result = normalize(RasterIcon(QImage()))

        assert isinstance(result, Err)
        assert isinstance(result.error, NormalizationError)


class TestRenderableIcons:

    def test_missing_intrinsic_size_uses_96(self) -> None:
        """Renderable with intrinsic size (-1, -1) becomes 96x96."""
        result = normalize(RenderableIcon(QSize(-1, -1), fill_red))

        assert isinstance(result, Ok)
        assert (result.value.width, result.value.height) == (96, 96)

    def test_each_dimension_falls_back_independently(self) -> None:
        assert canvas_size(QSize(-1, 40)) == QSize(96, 40)
        assert canvas_size(QSize(64, 0)) == QSize(64, 96)
        assert canvas_size(QSize()) == QSize(96, 96)

    def test_intrinsic_size_is_respected(self) -> None:
        result = normalize(RenderableIcon(QSize(20, 30), fill_red))

        assert (result.value.width, result.value.height) == (20, 30)

    def test_canvas_is_rgba8888_and_fully_painted(self) -> None:
        bitmap = normalize(RenderableIcon(QSize(10, 10), fill_red)).unwrap()

        assert bitmap.image.format() == QImage.Format.Format_RGBA8888
        assert bitmap.image.pixelColor(0, 0).red() == 255
        assert bitmap.image.pixelColor(9, 9).red() == 255

    def test_paint_bounds_cover_whole_canvas(self) -> None:
        seen = []

        def record(painter: QPainter, bounds: QRect) -> None:
            seen.append(QRect(bounds))

        normalize(RenderableIcon(QSize(), record))

        assert seen == [QRect(0, 0, 96, 96)]

    def test_paint_failure_is_an_error_value(self) -> None:
        def boom(painter: QPainter, bounds: QRect) -> None:
            raise RuntimeError("driver exploded")

        result = normalize(RenderableIcon(QSize(16, 16), boom))

        assert isinstance(result, Err)
        assert isinstance(result.error, NormalizationError)
        assert "driver exploded" in str(result.error)

    def test_svg_uses_its_default_size(self, svg_bytes: bytes) -> None:
        bitmap = normalize(svg_icon(svg_bytes)).unwrap()

        assert (bitmap.width, bitmap.height) == (24, 24)
        assert bitmap.image.pixelColor(12, 12).red() > 200

    def test_invalid_svg_is_an_error(self) -> None:
        result = normalize(svg_icon(b"<not-svg"))

        assert isinstance(result, Err)
        assert isinstance(result.error, NormalizationError)


def test_unsupported_resource_shape() -> None:
    result = normalize("definitely not an icon")

    assert isinstance(result, Err)
    assert "unsupported" in str(result.error)


class TestLoadIconFile:

    def test_png_loads_as_raster(self, png_file) -> None:
        resource = load_icon_file(png_file)

        assert isinstance(resource, RasterIcon)
        assert resource.image.size() == QSize(32, 32)

    def test_svg_loads_as_renderable(self, tmp_path, svg_bytes) -> None:
        path = tmp_path / "icon.svg"
        path.write_bytes(svg_bytes)

        assert isinstance(load_icon_file(path), RenderableIcon)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(IconResolutionError):
            load_icon_file(tmp_path / "nope.png")

    def test_garbage_file(self, tmp_path) -> None:
        path = tmp_path / "broken.png"
        path.write_bytes(b"not a png at all")

        with pytest.raises(IconResolutionError):
            load_icon_file(path)
