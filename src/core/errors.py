"""Exception types shared by the integrations, services and HTTP layer."""

from __future__ import annotations

__all__ = [
    "AssetLoadError",
    "LibraryRestrictedError",
    "ProfileUnavailableError",
    "SteamCardError",
    "SteamIdResolutionError",
]


class SteamCardError(Exception):
    """Base class for all Steam Card errors."""


class SteamIdResolutionError(SteamCardError):
    """A vanity identifier could not be mapped to a SteamID64."""


class ProfileUnavailableError(SteamCardError):
    """The primary player summary could not be fetched."""


class LibraryRestrictedError(SteamCardError):
    """The owned-games list could not be read (usually a private library)."""


class AssetLoadError(SteamCardError):
    """A font or image could not be loaded or decoded."""
