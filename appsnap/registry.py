#===============================================================================
#  AppSnap | registry.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Application registries: where installed apps and their raw icons come from.
#    - DesktopEntryRegistry : freedesktop.org .desktop files (Linux desktops)
#    - StaticRegistry       : a fixed in-memory list (demo mode, tests)
#
#  Folder Conventions
#  ------------------
#    <user data dir>/applications/*.desktop    -> user apps (listed first)
#    <system data dir>/applications/*.desktop  -> system apps (excluded later)
#    <data dir>/icons/hicolor/<size>/apps/     -> named icons
#    <data dir>/pixmaps/                       -> legacy named icons
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import configparser
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from PySide6.QtCore import QRect, QSize, Qt
from PySide6.QtGui import QColor, QIcon, QPainter

from .constants import DESKTOP_ENTRY_SECTION, DESKTOP_FILE_SUFFIX, ICON_FILE_SUFFIXES
from .errors import EnumerationError, IconResolutionError
from .icon_resource import IconResource, RenderableIcon, load_icon_file, qicon_icon
from .models import InstalledApp

logger = logging.getLogger(__name__)

SIZE_DIR_RE = re.compile(r"^(\d+)x\d+(?:@\d+)?$")


@dataclass(frozen=True)
class RegistryContext:
    """Everything a registry needs to know about the host, passed explicitly."""
    user_data_dir: Path
    data_dirs: Tuple[Path, ...] = ()
    icon_theme: str = ""

    @classmethod
    def from_environment(cls, extra_data_dirs: Iterable[str] = (), icon_theme: str = "") -> "RegistryContext":
        """Build a context from the XDG base-directory variables."""
        user = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        system = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
        dirs = [Path(p) for p in extra_data_dirs if p]
        dirs += [Path(p) for p in system.split(os.pathsep) if p]
        return cls(user_data_dir=Path(user), data_dirs=tuple(dirs), icon_theme=icon_theme)

    def all_data_dirs(self) -> List[Path]:
        return [self.user_data_dir, *self.data_dirs]


def apply_icon_theme(context: RegistryContext) -> None:
    """Select the Qt icon theme used for named icons. Process-wide, so call once at startup."""
    if context.icon_theme:
        QIcon.setThemeName(context.icon_theme)


class ApplicationRegistry(ABC):
    """The host's application registry.

    list_installed_applications may raise EnumerationError; resolve_icon may
    raise anything or return None, both of which only cost that app its icon.
    The context is always passed in; registries keep no state between calls.
    """

    @abstractmethod
    def list_installed_applications(self, context: RegistryContext) -> List[InstalledApp]:
        ...

    @abstractmethod
    def resolve_icon(self, package_name: str, context: RegistryContext) -> Optional[IconResource]:
        ...


# ----------------------------
# freedesktop.org desktop entries
# ----------------------------
def scan_desktop_dir(apps_dir: Path) -> List[Path]:
    """Return the .desktop files directly inside apps_dir (no recursion).

    A missing directory is simply empty; an unreadable one fails enumeration.
    """
    if not apps_dir.is_dir():
        return []
    try:
        items = sorted(apps_dir.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        raise EnumerationError(f"cannot read {apps_dir}: {e}") from e
    return [p for p in items if p.is_file() and p.suffix.lower() == DESKTOP_FILE_SUFFIX]


def parse_desktop_entry(path: Path) -> Optional[Dict[str, str]]:
    """Read the [Desktop Entry] group, or None when the file is unusable."""
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # keys are case-sensitive
    try:
        parser.read_string(path.read_text(encoding="utf-8", errors="ignore"), source=str(path))
    except (OSError, configparser.Error) as e:
        logger.warning("Skipping malformed desktop entry %s: %s", path, e)
        return None
    if not parser.has_section(DESKTOP_ENTRY_SECTION):
        return None
    return dict(parser.items(DESKTOP_ENTRY_SECTION))


def is_listable(entry: Dict[str, str]) -> bool:
    if entry.get("Type", "Application") != "Application":
        return False
    for flag in ("NoDisplay", "Hidden"):
        if entry.get(flag, "").strip().lower() == "true":
            return False
    return True


def _size_key(folder: Path) -> int:
    if folder.name == "scalable":
        return 1 << 30
    m = SIZE_DIR_RE.match(folder.name)
    return int(m.group(1)) if m else 0


def find_named_icon(name: str, data_dirs: Sequence[Path]) -> Optional[Path]:
    """Look up a named icon in the hicolor theme (scalable, then largest raster) and pixmaps."""
    for base in data_dirs:
        hicolor = base / "icons" / "hicolor"
        if hicolor.is_dir():
            for size_dir in sorted(hicolor.iterdir(), key=_size_key, reverse=True):
                for suffix in ICON_FILE_SUFFIXES:
                    candidate = size_dir / "apps" / f"{name}{suffix}"
                    if candidate.is_file():
                        return candidate

    for base in data_dirs:
        for suffix in ICON_FILE_SUFFIXES:
            candidate = base / "pixmaps" / f"{name}{suffix}"
            if candidate.is_file():
                return candidate
    return None


def resolve_icon_key(icon: str, context: RegistryContext, package_name: str = "") -> Optional[IconResource]:
    """Turn an Icon= value into a resource: absolute path, named icon on disk, then the Qt icon theme."""
    if not icon:
        return None

    path = Path(icon)
    if path.is_absolute():
        return load_icon_file(path)

    found = find_named_icon(icon, context.all_data_dirs())
    if found is not None:
        return load_icon_file(found)

    themed = QIcon.fromTheme(icon)
    if not themed.isNull():
        return qicon_icon(themed)

    raise IconResolutionError(f"icon '{icon}' not found", package_name or None)


def desktop_sources(context: RegistryContext) -> List[Tuple[Path, bool]]:
    """(applications dir, is_system) pairs in lookup order: user first, then system."""
    dirs = [(context.user_data_dir, False)] + [(d, True) for d in context.data_dirs]
    return [(d / "applications", is_system) for d, is_system in dirs]


class DesktopEntryRegistry(ApplicationRegistry):
    """Lists applications from .desktop files.

    Entries in the user data dir are user apps; entries in the system data
    dirs are system apps. A user entry hides a system entry with the same id,
    so ids stay unique within one listing. Nothing is remembered between calls.
    """

    def list_installed_applications(self, context: RegistryContext) -> List[InstalledApp]:
        apps: List[InstalledApp] = []
        seen = set()

        for apps_dir, is_system in desktop_sources(context):
            for path in scan_desktop_dir(apps_dir):
                desktop_id = path.stem
                if desktop_id in seen:
                    continue
                entry = parse_desktop_entry(path)
                if entry is None:
                    continue
                # A hidden user entry still masks the system one
                seen.add(desktop_id)
                if not is_listable(entry):
                    continue

                apps.append(
                    InstalledApp(
                        package_name=desktop_id,
                        display_name=entry.get("Name", "").strip(),
                        is_system=is_system,
                        icon_supplier=partial(resolve_icon_key, entry.get("Icon", "").strip(), context, desktop_id),
                    )
                )

        logger.debug("Desktop entries listed: %d", len(apps))
        return apps

    def resolve_icon(self, package_name: str, context: RegistryContext) -> Optional[IconResource]:
        for apps_dir, _ in desktop_sources(context):
            path = apps_dir / f"{package_name}{DESKTOP_FILE_SUFFIX}"
            if not path.is_file():
                continue
            entry = parse_desktop_entry(path)
            if entry is None:
                break
            return resolve_icon_key(entry.get("Icon", "").strip(), context, package_name)
        raise IconResolutionError("no desktop entry", package_name)


# ----------------------------
# Fixed lists
# ----------------------------
IconSource = Union[IconResource, Callable[[], Optional[IconResource]], None]


@dataclass(frozen=True)
class StaticEntry:
    package_name: str
    display_name: str
    is_system: bool = False
    icon: IconSource = None


class StaticRegistry(ApplicationRegistry):
    """Serves a fixed list of entries; icons may be resources or callables producing them."""

    def __init__(self, entries: Sequence[StaticEntry]):
        self._entries = list(entries)
        self._by_name = {e.package_name: e for e in self._entries}

    def list_installed_applications(self, context: RegistryContext) -> List[InstalledApp]:
        return [
            InstalledApp(
                package_name=e.package_name,
                display_name=e.display_name,
                is_system=e.is_system,
                icon_supplier=partial(self.resolve_icon, e.package_name, context),
            )
            for e in self._entries
        ]

    def resolve_icon(self, package_name: str, context: Optional[RegistryContext] = None) -> Optional[IconResource]:
        entry = self._by_name.get(package_name)
        if entry is None:
            raise IconResolutionError("unknown package", package_name)
        if callable(entry.icon):
            return entry.icon()
        return entry.icon


def badge_icon(color: str) -> RenderableIcon:
    """A flat rounded badge with a white dot. Has no intrinsic size."""

    def _paint(painter: QPainter, bounds: QRect) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(color))
        radius = bounds.width() / 5
        painter.drawRoundedRect(bounds, radius, radius)
        painter.setBrush(QColor("white"))
        inset = bounds.width() // 3
        painter.drawEllipse(bounds.adjusted(inset, inset, -inset, -inset))

    return RenderableIcon(intrinsic_size=QSize(), paint=_paint)


DEMO_APPS = [
    ("com.instagram.android", "Instagram", "#E1306C"),
    ("com.spotify.music", "Spotify", "#1DB954"),
    ("com.whatsapp", "WhatsApp", "#25D366"),
    ("com.twitter.android", "Twitter", "#1DA1F2"),
]


def demo_registry() -> StaticRegistry:
    """Four well-known apps with drawn icons, for demos without a real registry."""
    return StaticRegistry([
        StaticEntry(package_name=pkg, display_name=name, icon=badge_icon(color))
        for pkg, name, color in DEMO_APPS
    ])
