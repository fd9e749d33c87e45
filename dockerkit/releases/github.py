"""
GitHub release index.

Looks up the latest published release of a repository through the GitHub
REST API. This is a read-only network call; the binary installer only
makes it after its cache checks have missed.
"""

import logging
import os
from typing import Optional

import requests

from dockerkit.core.exceptions import NoReleaseFoundError, ReleaseLookupError
from dockerkit.core.interfaces import ReleaseIndex
from dockerkit.releases.models import ReleaseAsset, ReleaseInfo

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubReleaseIndex(ReleaseIndex):
    """
    ReleaseIndex backed by the GitHub releases API.

    Example:
        >>> index = GitHubReleaseIndex()
        >>> release = index.latest_release("docker/docker-language-server")
        >>> print(release.version)
        v0.4.1
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the index.

        Args:
            api_url: GitHub API base URL
            token: Optional API token (raises the anonymous rate limit)
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls, api_url: str = DEFAULT_API_URL, token_env: str = "GITHUB_TOKEN", **kwargs):
        """Create an index whose token is read from an environment variable."""
        return cls(api_url=api_url, token=os.environ.get(token_env) or None, **kwargs)

    def latest_release(
        self, repository: str, require_assets: bool = True, pre_release: bool = False
    ) -> ReleaseInfo:
        """
        Get the latest release of a repository.

        Releases are returned newest first by the API; the first non-draft
        release whose prerelease flag equals `pre_release` (and which has
        assets, when `require_assets`) wins.

        Raises:
            NoReleaseFoundError: If no release matches
            ReleaseLookupError: If the API call fails or returns garbage
        """
        url = f"{self.api_url}/repos/{repository}/releases"
        logger.debug(f"Querying releases of {repository}: {url}")

        try:
            response = self.session.get(
                url,
                headers=self._headers(),
                params={"per_page": 100},
                timeout=self.timeout,
            )
            response.raise_for_status()
            releases = response.json()
        except requests.RequestException as e:
            raise ReleaseLookupError(
                f"failed to fetch releases of {repository}: {e}"
            ) from e
        except ValueError as e:
            raise ReleaseLookupError(
                f"release index returned invalid JSON for {repository}: {e}"
            ) from e

        if not isinstance(releases, list):
            raise ReleaseLookupError(
                f"release index returned unexpected payload for {repository}"
            )

        for entry in releases:
            if not isinstance(entry, dict) or entry.get("draft"):
                continue
            if bool(entry.get("prerelease")) != pre_release:
                continue

            release = _parse_release(entry)
            if require_assets and not release.assets:
                continue

            logger.info(f"Latest release of {repository}: {release.version}")
            return release

        reason = "no release with downloadable assets" if require_assets else ""
        raise NoReleaseFoundError(repository, reason)

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def _parse_release(entry: dict) -> ReleaseInfo:
    assets = tuple(
        ReleaseAsset(name=asset["name"], download_url=asset["browser_download_url"])
        for asset in entry.get("assets") or []
        if asset.get("name") and asset.get("browser_download_url")
    )
    return ReleaseInfo(version=str(entry.get("tag_name", "")), assets=assets)
