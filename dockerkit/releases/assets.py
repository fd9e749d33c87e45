"""
Release asset selection.

Asset names are a controlled, versioned surface:

    {tool_name}-{os}-{arch}-{version}{extension}

e.g. docker-language-server-darwin-arm64-v0.4.1. Matching is exact string
equality; there is no fuzzy fallback.
"""

import logging

from dockerkit.core.exceptions import AssetNotFoundError
from dockerkit.core.platform import PlatformTriple
from dockerkit.releases.models import ReleaseAsset, ReleaseInfo

logger = logging.getLogger(__name__)


def expected_asset_name(tool_name: str, platform: PlatformTriple, version: str) -> str:
    """
    Compute the asset file name for a tool release on a platform.

    Example:
        >>> expected_asset_name("mytool", PlatformTriple("linux", "x86_64", ""), "1.2.3")
        'mytool-linux-amd64-1.2.3'
    """
    return (
        f"{tool_name}-{platform.asset_os}-{platform.asset_arch}-"
        f"{version}{platform.executable_extension}"
    )


def select_asset(release: ReleaseInfo, platform: PlatformTriple, tool_name: str) -> ReleaseAsset:
    """
    Find the asset of a release built for the given platform.

    Raises:
        AssetNotFoundError: If no asset carries the expected name
    """
    expected = expected_asset_name(tool_name, platform, release.version)

    for asset in release.assets:
        if asset.name == expected:
            logger.debug(f"Selected asset {asset.name}: {asset.download_url}")
            return asset

    logger.debug(f"Assets in {release.version}: {release.asset_names()}")
    raise AssetNotFoundError(expected, release.version)
