"""Release lookup and asset selection."""

from .models import ReleaseAsset, ReleaseInfo
from .github import GitHubReleaseIndex
from .assets import expected_asset_name, select_asset

__all__ = [
    "ReleaseAsset",
    "ReleaseInfo",
    "GitHubReleaseIndex",
    "expected_asset_name",
    "select_asset",
]
