"""
Core interfaces for dockerkit.

This module defines the abstract collaborators the resolution pipeline
depends on. A host editor supplies its own implementations; dockerkit ships
local ones (see core.environment, core.download, releases.github,
packages.npm, tools.status, config.settings) so the pipeline also runs
standalone.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from dockerkit.config.settings import LspSettings
    from dockerkit.core.environment import Worktree
    from dockerkit.releases.models import ReleaseInfo


class InstallationStatus(Enum):
    """Installation progress reported to the host UI."""

    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"
    NONE = "none"
    FAILED = "failed"


class DownloadedFileType(Enum):
    """How a downloaded file is unpacked at its destination."""

    UNCOMPRESSED = "uncompressed"
    GZIP = "gzip"
    GZIP_TAR = "gzip_tar"
    ZIP = "zip"


class SettingsProvider(ABC):
    """Host settings lookup for language servers."""

    @abstractmethod
    def lsp_settings(self, server_id: str, worktree: "Worktree") -> "LspSettings":
        """
        Get the user settings for a language server.

        Args:
            server_id: Language server identifier
            worktree: Worktree the server is started for

        Returns:
            LspSettings (fields are None when the user set nothing)
        """
        pass


class HostEnvironment(ABC):
    """Execution environment of the host."""

    @abstractmethod
    def which_on_path(self, name: str, worktree: "Worktree") -> Optional[str]:
        """
        Look an executable up on the worktree's search path.

        Returns:
            Absolute path of the executable, or None if not found
        """
        pass

    @abstractmethod
    def current_platform(self) -> Tuple[str, str]:
        """
        Get the host (os, arch) pair.

        Returns:
            os in {'mac', 'linux', 'windows'}, arch in {'aarch64', 'x86_64', 'x86'}
        """
        pass

    @abstractmethod
    def node_runtime_path(self) -> str:
        """Get the path to the Node.js runtime used to launch npm-based servers."""
        pass


class ReleaseIndex(ABC):
    """Remote index of published tool releases."""

    @abstractmethod
    def latest_release(
        self, repository: str, require_assets: bool = True, pre_release: bool = False
    ) -> "ReleaseInfo":
        """
        Get the latest release of a repository.

        Raises:
            NoReleaseFoundError: If no matching release exists
            ReleaseLookupError: If the index cannot be queried
        """
        pass


class PackageRegistry(ABC):
    """Language-specific package registry (npm)."""

    @abstractmethod
    def latest_package_version(self, name: str) -> str:
        """Get the latest published version of a package."""
        pass

    @abstractmethod
    def installed_package_version(self, name: str) -> Optional[str]:
        """Get the locally installed version of a package, or None."""
        pass

    @abstractmethod
    def install_package(self, name: str, version: str) -> None:
        """
        Install an exact version of a package.

        Raises:
            PackageInstallError: If installation fails
        """
        pass


class FileTransfer(ABC):
    """File download and permission primitives."""

    @abstractmethod
    def download_file(
        self, url: str, destination: Path, file_type: DownloadedFileType
    ) -> None:
        """
        Download a file to a destination path.

        Raises:
            DownloadError: If the download fails
        """
        pass

    @abstractmethod
    def make_executable(self, path: Path) -> None:
        """
        Mark a file executable.

        Raises:
            MakeExecutableError: If permissions cannot be changed
        """
        pass


class StatusReporter(ABC):
    """Fire-and-forget installation status notifications."""

    @abstractmethod
    def set_installation_status(
        self, server_id: str, status: InstallationStatus, detail: str = ""
    ) -> None:
        pass


__all__ = [
    "InstallationStatus",
    "DownloadedFileType",
    "SettingsProvider",
    "HostEnvironment",
    "ReleaseIndex",
    "PackageRegistry",
    "FileTransfer",
    "StatusReporter",
]
