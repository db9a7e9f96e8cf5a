"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

# Headless Qt for painting and image I/O
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QSize, Qt  # noqa: E402
from PySide6.QtGui import QColor, QGuiApplication, QImage  # noqa: E402

from appsnap.registry import RegistryContext  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One QGuiApplication for the whole session."""
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app


def make_image(width: int, height: int, color: str = "#0078D7") -> QImage:
    image = QImage(QSize(width, height), QImage.Format.Format_ARGB32)
    image.fill(QColor(color))
    return image


@pytest.fixture
def raster_48() -> QImage:
    """A 48x48 solid raster."""
    return make_image(48, 48)


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    """A 32x32 PNG on disk."""
    path = tmp_path / "icon.png"
    assert make_image(32, 32, "#107C10").save(str(path), "PNG")
    return path


SVG_24 = b"""<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">
<rect x="2" y="2" width="20" height="20" fill="#E81123"/>
</svg>"""


@pytest.fixture
def svg_bytes() -> bytes:
    return SVG_24


@pytest.fixture
def xdg_dirs(tmp_path: Path) -> RegistryContext:
    """Empty user and system data dirs laid out like XDG_DATA_HOME / XDG_DATA_DIRS."""
    user = tmp_path / "home" / ".local" / "share"
    system = tmp_path / "usr" / "share"
    (user / "applications").mkdir(parents=True)
    (system / "applications").mkdir(parents=True)
    return RegistryContext(user_data_dir=user, data_dirs=(system,))


def _write_desktop_entry(apps_dir: Path, desktop_id: str, **keys: str) -> Path:
    lines = ["[Desktop Entry]", "Type=Application"]
    lines += [f"{k}={v}" for k, v in keys.items()]
    path = apps_dir / f"{desktop_id}.desktop"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def desktop_entry():
    """Writer for minimal .desktop files: desktop_entry(dir, id, Name=..., Icon=...)."""
    return _write_desktop_entry
