"""Version information for Wayfinder.

This module provides version information read from the VERSION file
in the project root, with fallback for packaged distributions.
"""

from pathlib import Path

__version__ = "0.1.0"  # Fallback version


def get_version() -> str:
    """Get the current version string.

    Reads from VERSION file in project root or falls back to __version__.

    Returns:
        Version string (e.g., "0.1.0").
    """
    version_path = Path(__file__).parent.parent.parent / "VERSION"  # src/wayfinder -> root
    if version_path.exists():
        return version_path.read_text(encoding="utf-8").strip()
    return __version__
