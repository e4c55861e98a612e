"""IoT monitoring HTTP functions: device state CRUD and WaterBot status."""

from __future__ import annotations

import re
from pathlib import Path

__all__ = []

# Read version from VERSION file
_VERSION_FILE = Path(__file__).parent.parent.parent / "VERSION"
if _VERSION_FILE.exists():
    __version__ = _VERSION_FILE.read_text(encoding="utf-8").strip()
else:
    __version__ = "0.0.0"

_PRERELEASE_PATTERN = re.compile(r"[-.]?(dev|a|b|rc)(\d*)$")
_PRERELEASE_NAMES = {"dev": "dev", "a": "alpha", "b": "beta", "rc": "rc"}


def get_version_type() -> str:
    """Get version type: 'release', 'dev', 'alpha', 'beta', or 'rc'."""
    match = _PRERELEASE_PATTERN.search(__version__)
    if not match:
        return "release"
    return _PRERELEASE_NAMES[match.group(1)]


def is_release_version() -> bool:
    """Check if current version is a release version (not a pre-release)."""
    return get_version_type() == "release"
