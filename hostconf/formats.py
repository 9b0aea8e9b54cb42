"""Pick the parsing and mutation strategy for a configuration file."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Union

from .errors import InvalidFormatError


class Platform(str, Enum):
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"


class SourceFormat(str, Enum):
    TRADITIONAL = "traditional"
    DEB822 = "deb822"
    DESKTOP_ENTRY = "desktop-entry"
    PROPERTY_LIST = "property-list"


_LINUX_SUFFIXES = {
    ".list": SourceFormat.TRADITIONAL,
    ".sources": SourceFormat.DEB822,
    ".desktop": SourceFormat.DESKTOP_ENTRY,
}

APT_SUFFIXES = (".list", ".sources")


def detect_format(path: Union[str, Path], platform: Platform) -> SourceFormat:
    """Return the format of ``path`` on ``platform``.

    ``/etc/apt/sources.list`` has the ``.list`` suffix and is handled like
    any other traditional file.
    """
    suffix = Path(path).suffix
    if platform is Platform.MACOS:
        if suffix == ".plist":
            return SourceFormat.PROPERTY_LIST
    elif suffix in _LINUX_SUFFIXES:
        return _LINUX_SUFFIXES[suffix]
    raise InvalidFormatError(f"Unsupported configuration file: {path}")


def is_apt_source(path: Path) -> bool:
    return path.is_file() and path.suffix in APT_SUFFIXES


def has_format(path: Path, platform: Platform, expected: SourceFormat) -> bool:
    """True for a regular file that ``detect_format`` maps to ``expected``."""
    try:
        return path.is_file() and detect_format(path, platform) is expected
    except InvalidFormatError:
        return False
