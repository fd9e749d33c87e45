"""
Binary-release installer.

Resolves a tool distributed as per-platform release binaries:

1. CheckHostPath  - a binary already on the worktree's PATH wins outright
2. CheckCache     - a previously recorded binary that is still a file wins
3. QueryLatest    - ask the release index for the latest release
4. SelectAsset    - pick the asset built for this platform
5. EnsureDirectory- create {tool_id}-{version}/ in the work directory
6. Download       - fetch the asset unless the binary is already there
7. MakeExecutable - mark it executable
8. Prune          - remove the tool's other version directories (best-effort)
9. CacheUpdate    - record the binary as current

Steps 6-8 are skipped when the target binary already exists, which lets an
interrupted earlier run resume without downloading again. A resumed binary
that is not executable is marked executable first, and a binary that cannot
be marked executable is removed so it is never picked up as present.
"""

import logging
import os
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dockerkit.core.environment import Worktree
from dockerkit.core.exceptions import DownloadError, InstallError
from dockerkit.core.interfaces import (
    DownloadedFileType,
    FileTransfer,
    HostEnvironment,
    InstallationStatus,
    ReleaseIndex,
    StatusReporter,
)
from dockerkit.core.locking import LockManager
from dockerkit.core.platform import describe_platform
from dockerkit.releases.assets import select_asset
from dockerkit.tools.cache import BinaryCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinaryTool:
    """
    A tool published as GitHub release binaries.

    Attributes:
        tool_id: Tool identity; prefix of its version directories
        repository: GitHub repository ('owner/name')
        asset_name: Tool name used in asset file names
        binary_name: Executable name on PATH and inside the version directory
    """

    tool_id: str
    repository: str
    asset_name: str
    binary_name: str


class BinaryReleaseInstaller:
    """
    Installs and tracks the current binary of one release-distributed tool.

    Example:
        >>> installer = BinaryReleaseInstaller(
        ...     tool, LocalEnvironment(), GitHubReleaseIndex(), HttpFileTransfer(),
        ...     BinaryCache(work_dir), LoggingStatusReporter(),
        ... )
        >>> binary = installer.resolve(Worktree(Path.cwd()))
    """

    def __init__(
        self,
        tool: BinaryTool,
        environment: HostEnvironment,
        release_index: ReleaseIndex,
        transfer: FileTransfer,
        cache: BinaryCache,
        status: StatusReporter,
        lock_manager: Optional[LockManager] = None,
        lock_timeout: float = 300,
    ):
        self.tool = tool
        self.environment = environment
        self.release_index = release_index
        self.transfer = transfer
        self.cache = cache
        self.status = status
        self.lock_manager = lock_manager
        self.lock_timeout = lock_timeout

    def resolve(self, worktree: Worktree) -> Path:
        """
        Get a usable binary path, installing the latest release if needed.

        Raises:
            InstallError: Any failure from QueryLatest through MakeExecutable
        """
        on_path = self.environment.which_on_path(self.tool.binary_name, worktree)
        if on_path:
            logger.debug(f"Using {self.tool.binary_name} from PATH: {on_path}")
            return Path(on_path)

        cached = self.cache.current(self.tool.tool_id)
        if self.cache.has_valid_binary(cached):
            logger.debug(f"Using cached {self.tool.tool_id} binary: {cached}")
            return cached

        try:
            with self._lock():
                return self._install()
        except InstallError as e:
            self.status.set_installation_status(
                self.tool.tool_id, InstallationStatus.FAILED, str(e)
            )
            raise

    def _lock(self):
        if self.lock_manager is None:
            return nullcontext()
        return self.lock_manager.tool_lock(self.tool.tool_id, timeout=self.lock_timeout)

    def _install(self) -> Path:
        tool = self.tool
        platform = describe_platform(*self.environment.current_platform())

        self.status.set_installation_status(
            tool.tool_id, InstallationStatus.CHECKING_FOR_UPDATE
        )
        release = self.release_index.latest_release(
            tool.repository, require_assets=True, pre_release=False
        )
        asset = select_asset(release, platform, tool.asset_name)

        version_dir = self.cache.version_directory(tool.tool_id, release.version)
        self.cache.ensure_directory(version_dir)
        binary_path = version_dir / platform.executable_name(tool.binary_name)

        if not self.cache.has_valid_binary(binary_path):
            self.status.set_installation_status(
                tool.tool_id, InstallationStatus.DOWNLOADING, release.version
            )
            logger.info(f"Installing {tool.tool_id} {release.version} from {asset.name}")

            self.transfer.download_file(
                asset.download_url, binary_path, DownloadedFileType.UNCOMPRESSED
            )
            self._make_executable(binary_path)

            if not self.cache.has_valid_binary(binary_path):
                raise DownloadError(
                    f"downloaded {asset.name} but {binary_path} is not a file"
                )

            pruned = self.cache.prune_outdated(tool.tool_id, keep=version_dir)
            if not pruned.ok:
                logger.warning(
                    f"Installed {tool.tool_id} {release.version} but could not remove "
                    f"{len(pruned.failed)} outdated version(s): {'; '.join(pruned.errors)}"
                )
        else:
            logger.info(f"{tool.tool_id} {release.version} already present at {binary_path}")
            if not os.access(binary_path, os.X_OK):
                self._make_executable(binary_path)

        self.cache.record(tool.tool_id, binary_path)
        self.status.set_installation_status(tool.tool_id, InstallationStatus.NONE)
        return binary_path

    def _make_executable(self, binary_path: Path) -> None:
        """Mark the binary executable, removing it if that fails."""
        try:
            self.transfer.make_executable(binary_path)
        except InstallError:
            try:
                binary_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Failed to remove non-executable binary {binary_path}: {e}")
            raise


__all__ = ["BinaryTool", "BinaryReleaseInstaller"]
