"""
npm package registry.

Queries the npm registry over HTTP for the latest published version and
installs packages with the npm CLI into the dockerkit work directory, so a
package's files end up under <install_dir>/node_modules/<name>/.
"""

import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import requests

from dockerkit.core.exceptions import PackageInstallError
from dockerkit.core.interfaces import PackageRegistry

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


class NpmRegistry(PackageRegistry):
    """
    PackageRegistry backed by the npm registry and the npm CLI.

    Example:
        >>> registry = NpmRegistry(Path.home() / ".dockerkit")
        >>> version = registry.latest_package_version("dockerfile-language-server-nodejs")
        >>> registry.install_package("dockerfile-language-server-nodejs", version)
    """

    def __init__(
        self,
        install_dir: Path,
        registry_url: str = DEFAULT_REGISTRY_URL,
        npm_command: str = "npm",
        timeout: int = 30,
        install_timeout: int = 300,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the registry.

        Args:
            install_dir: Prefix directory npm installs into
            registry_url: npm registry base URL
            npm_command: npm executable name or path
            timeout: HTTP timeout in seconds
            install_timeout: Timeout for `npm install` in seconds
            session: Optional requests session to reuse
        """
        self.install_dir = Path(install_dir)
        self.registry_url = registry_url.rstrip("/")
        self.npm_command = npm_command
        self.timeout = timeout
        self.install_timeout = install_timeout
        self.session = session or requests.Session()

    def package_dir(self, name: str) -> Path:
        return self.install_dir / "node_modules" / name

    def latest_package_version(self, name: str) -> str:
        """
        Get the version tagged `latest` in the registry.

        Raises:
            PackageInstallError: If the registry cannot be queried
        """
        url = f"{self.registry_url}/{requests.utils.quote(name, safe='@')}/latest"
        logger.debug(f"Querying npm registry: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            version = response.json()["version"]
        except requests.RequestException as e:
            raise PackageInstallError(
                f"failed to query npm registry for '{name}': {e}"
            ) from e
        except (ValueError, KeyError, TypeError) as e:
            raise PackageInstallError(
                f"npm registry returned no version for '{name}': {e}"
            ) from e

        return str(version)

    def installed_package_version(self, name: str) -> Optional[str]:
        manifest = self.package_dir(name) / "package.json"
        if not manifest.is_file():
            return None

        try:
            with open(manifest, "r", encoding="utf-8") as f:
                version = json.load(f).get("version")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Unreadable package manifest {manifest}: {e}")
            return None

        return str(version) if version else None

    def install_package(self, name: str, version: str) -> None:
        """
        Install an exact package version with `npm install`.

        Raises:
            PackageInstallError: If npm is missing, times out or fails
        """
        npm = shutil.which(self.npm_command) or self.npm_command
        try:
            self.install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PackageInstallError(
                f"failed to create npm prefix {self.install_dir}: {e}"
            ) from e

        cmd = [
            npm,
            "install",
            f"{name}@{version}",
            "--prefix",
            str(self.install_dir),
            "--save-exact",
            "--no-audit",
            "--no-fund",
        ]
        logger.info(f"Installing {name}@{version} via npm")
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.install_dir,
                capture_output=True,
                text=True,
                timeout=self.install_timeout,
            )
        except FileNotFoundError as e:
            raise PackageInstallError(
                f"npm executable not found ({self.npm_command}): {e}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PackageInstallError(
                f"npm install of {name}@{version} timed out: {e}"
            ) from e
        except OSError as e:
            raise PackageInstallError(
                f"failed to run npm ({self.npm_command}): {e}"
            ) from e

        if result.returncode != 0:
            raise PackageInstallError(
                f"npm install of {name}@{version} failed: {result.stderr.strip()}"
            )


__all__ = ["NpmRegistry"]
