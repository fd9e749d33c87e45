"""
Centralized exception hierarchy for dockerkit.

Every failure surfaced to the host derives from DockerKitError so callers
can report a single request as failed without knowing which layer raised.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class DockerKitError(Exception):
    """Base exception for all dockerkit errors."""

    pass


class ConfigError(DockerKitError):
    """Configuration parsing or validation error."""

    pass


class FilesystemError(DockerKitError):
    """Base exception for filesystem operations."""

    pass


class UnknownLanguageServerError(DockerKitError):
    """Raised when the host asks for a language server this package does not provide."""

    def __init__(self, server_id: str):
        self.server_id = server_id
        super().__init__(f"unknown language server: {server_id}")


# ============================================================================
# Install Exceptions
# ============================================================================


class InstallError(DockerKitError):
    """Base exception for tool resolution and installation failures."""

    pass


class UnsupportedPlatformError(InstallError):
    """Raised when the host OS or architecture has no published artifacts."""

    pass


class ReleaseLookupError(InstallError):
    """Raised when the release index cannot be queried."""

    pass


class NoReleaseFoundError(InstallError):
    """Raised when the release index has no usable release."""

    def __init__(self, repository: str, reason: str = ""):
        self.repository = repository
        msg = f"no release found for {repository}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class AssetNotFoundError(InstallError):
    """Raised when a release does not carry the asset for this platform."""

    def __init__(self, expected_name: str, version: str = ""):
        self.expected_name = expected_name
        self.version = version
        msg = f"no asset found matching {expected_name!r}"
        if version:
            msg += f" in release {version}"
        super().__init__(msg)


class InstallLockTimeoutError(InstallError):
    """Raised when another process holds a tool's install lock for too long."""

    def __init__(self, tool_id: str, lock_path: str, timeout: float):
        self.tool_id = tool_id
        self.lock_path = lock_path
        self.timeout = timeout
        super().__init__(
            f"could not acquire install lock for {tool_id} ({lock_path}) "
            f"after {timeout}s; another process may be installing it"
        )


class DirectoryCreationError(InstallError):
    """Raised when a version directory cannot be created."""

    pass


class DownloadError(InstallError):
    """Raised when a download fails."""

    pass


class MakeExecutableError(InstallError):
    """Raised when a downloaded file cannot be marked executable."""

    pass


class PackageInstallError(InstallError):
    """Raised when the package registry fails to install a package."""

    pass


class InstallVerificationError(InstallError):
    """Raised when an install reports success but the expected entry is missing."""

    def __init__(self, package_name: str, expected_path: str):
        self.package_name = package_name
        self.expected_path = expected_path
        super().__init__(
            f"installed package '{package_name}' did not contain expected path "
            f"'{expected_path}'"
        )


# ============================================================================
# Debug Adapter Exceptions
# ============================================================================


class DebugAdapterError(DockerKitError):
    """Base exception for debug adapter configuration errors."""

    pass


class UnsupportedAdapterError(DebugAdapterError):
    """Raised when the host launches an adapter this package does not own."""

    def __init__(self, adapter_name: str):
        self.adapter_name = adapter_name
        super().__init__(
            f'Unexpected debug adapter launched in the Dockerfile extension "{adapter_name}"'
        )


class UnsupportedRequestKindError(DebugAdapterError):
    """Raised when a raw debug config does not request `launch`."""

    def __init__(self, request: Optional[object] = None):
        self.request = request
        super().__init__(
            "Invalid request, expected `request` to be `launch`, "
            f"`attach` or any other value is unsupported (got {request!r})"
        )


class UnsupportedDebugRequestError(DebugAdapterError):
    """Raised for attach requests, which buildx cannot serve."""

    pass


class InvalidDebugConfigError(DebugAdapterError):
    """Raised when a stored debug configuration cannot be decoded."""

    pass


class InvalidPathError(DebugAdapterError):
    """Raised when a computed path cannot be represented as text."""

    pass
