"""Locates the bundled card assets (fonts, icons, watermark).

The directory is searched once and remembered for the process lifetime.
A candidate only counts when it contains the ``canvas`` or ``fonts``
subdirectory, so an unrelated ``resources`` folder is skipped.
"""

from __future__ import annotations

import sys
from pathlib import Path

__all__ = ["ASSET_SUBDIRS", "get_resources_dir", "resource_candidates"]

ASSET_SUBDIRS = ("canvas", "fonts")

_resources_dir: Path | None = None


def resource_candidates() -> list[Path]:
    """Returns the directories searched for assets, in priority order.

    1. ``src/resources`` (package data of an installed build)
    2. ``<project root>/resources`` (source checkout)
    3. ``<sys.prefix>/resources`` (container images)
    """
    src_dir = Path(__file__).resolve().parent.parent
    return [src_dir / "resources", src_dir.parent / "resources", Path(sys.prefix) / "resources"]


def _looks_like_assets(candidate: Path) -> bool:
    return candidate.is_dir() and any((candidate / sub).is_dir() for sub in ASSET_SUBDIRS)


def get_resources_dir() -> Path:
    """Get the directory holding the card assets.

    Returns:
        The first candidate from ``resource_candidates`` that holds assets.

    Raises:
        FileNotFoundError: If no candidate qualifies.
    """
    global _resources_dir
    if _resources_dir is not None:
        return _resources_dir

    candidates = resource_candidates()
    for candidate in candidates:
        if _looks_like_assets(candidate):
            _resources_dir = candidate
            return candidate

    searched = ", ".join(str(c) for c in candidates)
    raise FileNotFoundError(f"Could not locate the card assets directory. Searched: {searched}")
