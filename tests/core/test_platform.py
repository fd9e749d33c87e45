"""
Tests for platform detection and description.
"""

import pytest
from unittest.mock import patch

from dockerkit.core.exceptions import UnsupportedPlatformError
from dockerkit.core.platform import (
    PlatformTriple,
    describe_platform,
    detect_host_platform,
)


class TestDescribePlatform:
    """Test describe_platform()."""

    @pytest.mark.parametrize(
        "os_name,arch,suffix",
        [
            ("mac", "aarch64", "darwin-arm64"),
            ("mac", "x86_64", "darwin-amd64"),
            ("linux", "aarch64", "linux-arm64"),
            ("linux", "x86_64", "linux-amd64"),
            ("windows", "aarch64", "windows-arm64"),
            ("windows", "x86_64", "windows-amd64"),
        ],
    )
    def test_supported_platforms(self, os_name, arch, suffix):
        """Test every supported OS/arch pair maps to its artifact spelling."""
        triple = describe_platform(os_name, arch)

        assert triple.os == os_name
        assert triple.arch == arch
        assert triple.artifact_suffix() == suffix

    def test_windows_has_exe_extension(self):
        """Test only Windows gets the .exe extension."""
        assert describe_platform("windows", "x86_64").executable_extension == ".exe"
        assert describe_platform("linux", "x86_64").executable_extension == ""
        assert describe_platform("mac", "aarch64").executable_extension == ""

    def test_x86_is_unsupported(self):
        """Test 32-bit x86 has no published artifacts."""
        with pytest.raises(UnsupportedPlatformError, match="architecture"):
            describe_platform("linux", "x86")

    def test_unknown_os_is_unsupported(self):
        """Test an unknown OS is rejected."""
        with pytest.raises(UnsupportedPlatformError, match="operating system"):
            describe_platform("freebsd", "x86_64")

    def test_executable_name(self):
        """Test executable_name() appends the platform extension."""
        windows = PlatformTriple("windows", "x86_64", ".exe")
        linux = PlatformTriple("linux", "x86_64", "")

        assert windows.executable_name("docker-language-server") == "docker-language-server.exe"
        assert linux.executable_name("docker-language-server") == "docker-language-server"

    def test_str(self):
        """Test string form uses the normalized vocabulary."""
        assert str(describe_platform("mac", "aarch64")) == "mac-aarch64"


class TestDetectHostPlatform:
    """Test detect_host_platform()."""

    @pytest.mark.parametrize(
        "system,machine,expected",
        [
            ("Darwin", "arm64", ("mac", "aarch64")),
            ("Linux", "x86_64", ("linux", "x86_64")),
            ("Linux", "aarch64", ("linux", "aarch64")),
            ("Windows", "AMD64", ("windows", "x86_64")),
            ("Linux", "i686", ("linux", "x86")),
        ],
    )
    def test_normalizes_host_names(self, system, machine, expected):
        """Test platform.system()/machine() values are normalized."""
        with patch("platform.system", return_value=system), patch(
            "platform.machine", return_value=machine
        ):
            assert detect_host_platform() == expected

    def test_detection_is_cached(self):
        """Test detection runs once per process until the cache is cleared."""
        with patch("platform.system", return_value="Linux") as system, patch(
            "platform.machine", return_value="x86_64"
        ):
            detect_host_platform()
            detect_host_platform()

        assert system.call_count == 1
