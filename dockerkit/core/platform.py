"""
Platform detection for dockerkit.

This module turns the host operating system and CPU architecture into the
normalized triple used to pick release artifacts.

Features:
- Operating system detection (macOS, Linux, Windows)
- CPU architecture detection (aarch64, x86_64, x86)
- Artifact spelling of the platform (e.g. 'darwin-arm64', 'linux-amd64')
- Executable extension selection ('.exe' on Windows only)

Usage:
    from dockerkit.core.platform import describe_platform, detect_host_platform

    os_name, arch = detect_host_platform()
    triple = describe_platform(os_name, arch)
    print(f"Artifact suffix: {triple.artifact_suffix()}")
"""

import functools
import platform
from dataclasses import dataclass
from typing import Tuple

from dockerkit.core.exceptions import UnsupportedPlatformError

SUPPORTED_OS = ("mac", "linux", "windows")
SUPPORTED_ARCH = ("aarch64", "x86_64")

# Release artifacts spell platforms the Go way
_ASSET_OS = {"mac": "darwin", "linux": "linux", "windows": "windows"}
_ASSET_ARCH = {"aarch64": "arm64", "x86_64": "amd64"}


@dataclass(frozen=True)
class PlatformTriple:
    """
    Normalized host platform.

    Attributes:
        os: Operating system ('mac', 'linux', 'windows')
        arch: CPU architecture ('aarch64', 'x86_64')
        executable_extension: '.exe' on Windows, '' elsewhere
    """

    os: str
    arch: str
    executable_extension: str

    @property
    def asset_os(self) -> str:
        """Operating system as spelled in release asset names."""
        return _ASSET_OS[self.os]

    @property
    def asset_arch(self) -> str:
        """Architecture as spelled in release asset names."""
        return _ASSET_ARCH[self.arch]

    def artifact_suffix(self) -> str:
        """
        Get the platform part of an artifact name.

        Example:
            >>> PlatformTriple('linux', 'x86_64', '').artifact_suffix()
            'linux-amd64'
        """
        return f"{self.asset_os}-{self.asset_arch}"

    def executable_name(self, name: str) -> str:
        """Append the platform executable extension to a file name."""
        return f"{name}{self.executable_extension}"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


def describe_platform(os_name: str, arch: str) -> PlatformTriple:
    """
    Build the platform triple for a host OS and architecture.

    Args:
        os_name: Normalized OS name ('mac', 'linux', 'windows')
        arch: Normalized architecture ('aarch64', 'x86_64', 'x86')

    Returns:
        PlatformTriple for the host

    Raises:
        UnsupportedPlatformError: For x86 or any unknown OS/architecture
    """
    if os_name not in SUPPORTED_OS:
        raise UnsupportedPlatformError(f"unsupported operating system: {os_name}")
    if arch not in SUPPORTED_ARCH:
        raise UnsupportedPlatformError(f"unsupported architecture: {arch}")

    extension = ".exe" if os_name == "windows" else ""
    return PlatformTriple(os=os_name, arch=arch, executable_extension=extension)


@functools.lru_cache(maxsize=1)
def detect_host_platform() -> Tuple[str, str]:
    """
    Detect the current host OS and architecture.

    This function is cached - it only runs detection once per process.

    Returns:
        Tuple of (os, arch) in the normalized vocabulary
    """
    return _detect_os(), _detect_architecture()


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'mac', 'linux', 'windows', or the raw lowercase name
    """
    system = platform.system().lower()

    if system == "darwin":
        return "mac"
    elif system == "linux":
        return "linux"
    elif system == "windows":
        return "windows"
    return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'aarch64', 'x86_64', 'x86', or the raw name
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "aarch64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    return machine


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_host_platform() to re-detect.
    """
    detect_host_platform.cache_clear()


__all__ = [
    "PlatformTriple",
    "describe_platform",
    "detect_host_platform",
    "clear_platform_cache",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
]
