"""
Tests for per-tool install locks.
"""

import pytest
from filelock import FileLock

from dockerkit.core.exceptions import InstallError, InstallLockTimeoutError
from dockerkit.core.locking import LockManager


class TestLockManager:
    """Test LockManager."""

    def test_creates_lock_dir(self, temp_dir):
        """Test the lock directory is created on init."""
        lock_dir = temp_dir / "lock"

        LockManager(lock_dir)

        assert lock_dir.is_dir()

    def test_lock_path_is_sanitized(self, temp_dir):
        """Test separators in tool ids do not escape the lock directory."""
        manager = LockManager(temp_dir)

        path = manager.lock_path("docker/docker-language-server")

        assert path.parent == temp_dir
        assert path.name == "tool-docker-docker-language-server.lock"

    def test_lock_is_reentrant_across_calls(self, temp_dir):
        """Test a released lock can be acquired again."""
        manager = LockManager(temp_dir)

        with manager.tool_lock("docker-language-server", timeout=1):
            pass
        with manager.tool_lock("docker-language-server", timeout=1):
            pass

    def test_timeout_when_held(self, temp_dir):
        """Test a held lock times out another acquirer."""
        manager = LockManager(temp_dir)
        holder = FileLock(manager.lock_path("docker-language-server"))

        with holder:
            with pytest.raises(InstallLockTimeoutError) as exc_info:
                with manager.tool_lock("docker-language-server", timeout=0.1):
                    pass

        assert isinstance(exc_info.value, InstallError)
        assert exc_info.value.tool_id == "docker-language-server"
        assert exc_info.value.lock_path == str(manager.lock_path("docker-language-server"))

    def test_body_exceptions_propagate(self, temp_dir):
        """Test errors raised inside the lock are not swallowed."""
        manager = LockManager(temp_dir)

        with pytest.raises(RuntimeError, match="boom"):
            with manager.tool_lock("dockerfile-language-server", timeout=1):
                raise RuntimeError("boom")
