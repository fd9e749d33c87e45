"""Release data returned by a release index."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ReleaseAsset:
    """A single downloadable artifact attached to a release."""

    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseInfo:
    """A published release: its version tag and ordered assets."""

    version: str
    assets: Tuple[ReleaseAsset, ...] = ()

    def asset_names(self) -> list:
        return [asset.name for asset in self.assets]
