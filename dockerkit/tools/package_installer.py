"""
Package-manager installer.

Resolves a tool distributed through a package registry (npm) rather than
as release binaries. The package is installed into the work directory and
the tool is launched from a fixed entry point inside it.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dockerkit.core.exceptions import (
    InstallError,
    InstallVerificationError,
    PackageInstallError,
)
from dockerkit.core.interfaces import InstallationStatus, PackageRegistry, StatusReporter
from dockerkit.core.locking import LockManager
from dockerkit.tools.status import ResolutionMemo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageTool:
    """
    A tool installed from a package registry.

    Attributes:
        tool_id: Tool identity
        package_name: Registry package name
        entry_point: Entry script path relative to the install directory
    """

    tool_id: str
    package_name: str
    entry_point: str


class PackageInstaller:
    """
    Keeps a registry-installed tool at the latest published version.

    Registry failures are tolerated when a previously installed entry point
    is still on disk: availability wins over freshness.
    """

    def __init__(
        self,
        tool: PackageTool,
        registry: PackageRegistry,
        status: StatusReporter,
        install_dir: Path,
        lock_manager: Optional[LockManager] = None,
        lock_timeout: float = 300,
    ):
        self.tool = tool
        self.registry = registry
        self.status = status
        self.install_dir = Path(install_dir)
        self.lock_manager = lock_manager
        self.lock_timeout = lock_timeout

    @property
    def entry_path(self) -> Path:
        return self.install_dir / self.tool.entry_point

    def entry_exists(self) -> bool:
        return self.entry_path.is_file()

    def resolve(self, memo: ResolutionMemo) -> Path:
        """
        Get the entry point path, installing or upgrading the package if needed.

        Args:
            memo: Session memo; a tool resolved earlier in the session whose
                entry point still exists skips the registry entirely

        Raises:
            InstallError: If the registry cannot be queried, or the install
                fails and no previous install exists
            InstallVerificationError: If the install succeeded without
                producing the entry point
        """
        tool = self.tool
        if memo.is_resolved(tool.tool_id) and self.entry_exists():
            logger.debug(f"{tool.tool_id} already resolved this session")
            return self.entry_path

        lock = (
            self.lock_manager.tool_lock(tool.tool_id, timeout=self.lock_timeout)
            if self.lock_manager is not None
            else nullcontext()
        )
        try:
            with lock:
                self._install_latest()
        except InstallError as e:
            self.status.set_installation_status(
                tool.tool_id, InstallationStatus.FAILED, str(e)
            )
            raise

        memo.mark_resolved(tool.tool_id)
        self.status.set_installation_status(tool.tool_id, InstallationStatus.NONE)
        return self.entry_path

    def _install_latest(self) -> None:
        tool = self.tool
        entry_existed = self.entry_exists()

        self.status.set_installation_status(
            tool.tool_id, InstallationStatus.CHECKING_FOR_UPDATE
        )
        latest = self.registry.latest_package_version(tool.package_name)

        if entry_existed:
            installed = self.registry.installed_package_version(tool.package_name)
            if installed == latest:
                logger.debug(f"{tool.package_name} {installed} is up to date")
                return
            logger.info(f"Upgrading {tool.package_name} from {installed} to {latest}")

        self.status.set_installation_status(
            tool.tool_id, InstallationStatus.DOWNLOADING, latest
        )
        try:
            self._install_package(latest)
        except InstallError as e:
            if not self.entry_exists():
                raise
            logger.warning(
                f"Failed to install {tool.package_name}@{latest}, "
                f"keeping existing install at {self.entry_path}: {e}"
            )
            return

        if not self.entry_exists():
            raise InstallVerificationError(tool.package_name, tool.entry_point)

    def _install_package(self, version: str) -> None:
        """Install through the registry; OS-level errors count as install failures."""
        try:
            self.registry.install_package(self.tool.package_name, version)
        except OSError as e:
            raise PackageInstallError(
                f"failed to install {self.tool.package_name}@{version}: {e}"
            ) from e


__all__ = ["PackageTool", "PackageInstaller"]
