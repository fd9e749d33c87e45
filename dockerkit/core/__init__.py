"""
Core functionality for dockerkit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_global_cache_dir,
    ensure_work_dir,
)

from .locking import (
    LockManager,
)

from .platform import (
    PlatformTriple,
    describe_platform,
    detect_host_platform,
    clear_platform_cache,
)

from .environment import (
    Worktree,
    LocalEnvironment,
)

from .interfaces import (
    InstallationStatus,
    DownloadedFileType,
    SettingsProvider,
    HostEnvironment,
    ReleaseIndex,
    PackageRegistry,
    FileTransfer,
    StatusReporter,
)

from .exceptions import (
    DockerKitError,
    ConfigError,
    FilesystemError,
    UnknownLanguageServerError,
    InstallError,
    UnsupportedPlatformError,
    ReleaseLookupError,
    NoReleaseFoundError,
    AssetNotFoundError,
    InstallLockTimeoutError,
    DirectoryCreationError,
    DownloadError,
    MakeExecutableError,
    PackageInstallError,
    InstallVerificationError,
    DebugAdapterError,
    UnsupportedAdapterError,
    UnsupportedRequestKindError,
    UnsupportedDebugRequestError,
    InvalidDebugConfigError,
    InvalidPathError,
)

__all__ = [
    "get_global_cache_dir",
    "ensure_work_dir",
    "LockManager",
    "PlatformTriple",
    "describe_platform",
    "detect_host_platform",
    "clear_platform_cache",
    "Worktree",
    "LocalEnvironment",
    "InstallationStatus",
    "DownloadedFileType",
    "SettingsProvider",
    "HostEnvironment",
    "ReleaseIndex",
    "PackageRegistry",
    "FileTransfer",
    "StatusReporter",
    "DockerKitError",
    "ConfigError",
    "FilesystemError",
    "UnknownLanguageServerError",
    "InstallError",
    "UnsupportedPlatformError",
    "ReleaseLookupError",
    "NoReleaseFoundError",
    "AssetNotFoundError",
    "InstallLockTimeoutError",
    "DirectoryCreationError",
    "DownloadError",
    "MakeExecutableError",
    "PackageInstallError",
    "InstallVerificationError",
    "DebugAdapterError",
    "UnsupportedAdapterError",
    "UnsupportedRequestKindError",
    "UnsupportedDebugRequestError",
    "InvalidDebugConfigError",
    "InvalidPathError",
]
