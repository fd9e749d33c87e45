"""
Pytest configuration and shared fixtures for dockerkit tests.
"""

import pytest
import tempfile
from pathlib import Path
from typing import Generator

from dockerkit.core.environment import Worktree
from dockerkit.core.platform import clear_platform_cache


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = temp_dir / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.delenv("DOCKERKIT_HOME", raising=False)

    return fake_home


@pytest.fixture
def work_dir(temp_dir: Path) -> Path:
    """Create the extension work directory."""
    path = temp_dir / "work"
    path.mkdir()
    return path


@pytest.fixture
def worktree(temp_dir: Path) -> Worktree:
    """Create a worktree with an empty search path."""
    root = temp_dir / "project"
    root.mkdir()
    return Worktree(root, shell_env={"PATH": ""})


@pytest.fixture
def no_network(monkeypatch):
    """Disable network access for tests."""
    import socket

    def guard(*args, **kwargs):
        raise RuntimeError("Network access not allowed in this test")

    monkeypatch.setattr(socket, "socket", guard)


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()
