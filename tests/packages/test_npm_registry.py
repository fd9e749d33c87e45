"""
Tests for the npm package registry.

Registry HTTP calls are mocked with `responses`; `npm install` is patched.
"""

import json
import subprocess

import pytest
import responses
from unittest.mock import MagicMock, patch

from dockerkit.core.exceptions import PackageInstallError
from dockerkit.packages.npm import NpmRegistry

REGISTRY = "https://registry.npmjs.org"
PACKAGE = "dockerfile-language-server-nodejs"


class TestLatestPackageVersion:
    """Test NpmRegistry.latest_package_version()."""

    @responses.activate
    def test_returns_latest_version(self, temp_dir):
        responses.add(
            responses.GET, f"{REGISTRY}/{PACKAGE}/latest", json={"version": "0.13.0"}
        )

        assert NpmRegistry(temp_dir).latest_package_version(PACKAGE) == "0.13.0"

    @responses.activate
    def test_http_error(self, temp_dir):
        responses.add(responses.GET, f"{REGISTRY}/{PACKAGE}/latest", status=500)

        with pytest.raises(PackageInstallError, match="failed to query"):
            NpmRegistry(temp_dir).latest_package_version(PACKAGE)

    @responses.activate
    def test_missing_version_field(self, temp_dir):
        responses.add(responses.GET, f"{REGISTRY}/{PACKAGE}/latest", json={})

        with pytest.raises(PackageInstallError, match="no version"):
            NpmRegistry(temp_dir).latest_package_version(PACKAGE)


class TestInstalledPackageVersion:
    """Test NpmRegistry.installed_package_version()."""

    def test_reads_package_json(self, temp_dir):
        registry = NpmRegistry(temp_dir)
        package_dir = registry.package_dir(PACKAGE)
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_text(json.dumps({"version": "0.12.0"}))

        assert registry.installed_package_version(PACKAGE) == "0.12.0"

    def test_not_installed(self, temp_dir):
        assert NpmRegistry(temp_dir).installed_package_version(PACKAGE) is None

    def test_unreadable_manifest(self, temp_dir):
        registry = NpmRegistry(temp_dir)
        package_dir = registry.package_dir(PACKAGE)
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_text("{not json")

        assert registry.installed_package_version(PACKAGE) is None


class TestInstallPackage:
    """Test NpmRegistry.install_package()."""

    @patch("dockerkit.packages.npm.shutil.which", return_value="/usr/bin/npm")
    @patch("dockerkit.packages.npm.subprocess.run")
    def test_runs_npm_install(self, mock_run, mock_which, temp_dir):
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        NpmRegistry(temp_dir).install_package(PACKAGE, "0.13.0")

        cmd = mock_run.call_args[0][0]
        assert cmd[:3] == ["/usr/bin/npm", "install", f"{PACKAGE}@0.13.0"]
        assert "--prefix" in cmd
        assert cmd[cmd.index("--prefix") + 1] == str(temp_dir)
        assert mock_run.call_args[1]["cwd"] == temp_dir

    @patch("dockerkit.packages.npm.subprocess.run")
    def test_nonzero_exit(self, mock_run, temp_dir):
        mock_run.return_value = MagicMock(returncode=1, stderr="E404 Not Found\n")

        with pytest.raises(PackageInstallError, match="E404 Not Found"):
            NpmRegistry(temp_dir).install_package(PACKAGE, "9.9.9")

    @patch("dockerkit.packages.npm.subprocess.run", side_effect=FileNotFoundError("npm"))
    def test_npm_missing(self, mock_run, temp_dir):
        with pytest.raises(PackageInstallError, match="npm executable not found"):
            NpmRegistry(temp_dir, npm_command="no-such-npm").install_package(PACKAGE, "0.13.0")

    @patch(
        "dockerkit.packages.npm.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="npm", timeout=1),
    )
    def test_timeout(self, mock_run, temp_dir):
        with pytest.raises(PackageInstallError, match="timed out"):
            NpmRegistry(temp_dir).install_package(PACKAGE, "0.13.0")

    @patch(
        "dockerkit.packages.npm.subprocess.run",
        side_effect=PermissionError(13, "Permission denied"),
    )
    def test_npm_not_executable(self, mock_run, temp_dir):
        with pytest.raises(PackageInstallError, match="Permission denied"):
            NpmRegistry(temp_dir).install_package(PACKAGE, "0.13.0")

    def test_prefix_not_creatable(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(PackageInstallError, match="npm prefix"):
            NpmRegistry(blocker / "prefix").install_package(PACKAGE, "0.13.0")
