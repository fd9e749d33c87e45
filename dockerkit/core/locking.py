"""
Concurrent access control for dockerkit.

Two resolutions of the same tool must not download into, or prune, the
same version directories at the same time. This module provides a per-tool
file lock (cross-process, via the `filelock` library) that the installers
hold for the duration of an install.

Usage:
    from dockerkit.core.locking import LockManager

    lock_manager = LockManager(work_dir / "lock")
    with lock_manager.tool_lock("docker-language-server", timeout=300):
        # Download and install
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from dockerkit.core.directory import get_global_cache_dir
from dockerkit.core.exceptions import InstallLockTimeoutError

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages per-tool install locks.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (default: global cache/lock/)
        """
        if lock_dir is None:
            lock_dir = get_global_cache_dir() / "lock"

        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    def lock_path(self, tool_id: str) -> Path:
        safe_id = tool_id.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f"tool-{safe_id}.lock"

    @contextmanager
    def tool_lock(self, tool_id: str, timeout: float = 300):
        """
        Acquire the install lock for a tool.

        Args:
            tool_id: Tool identity (e.g., 'docker-language-server')
            timeout: Maximum wait time in seconds (default: 300 for long downloads)

        Yields:
            None

        Raises:
            InstallLockTimeoutError: If lock can't be acquired within timeout
        """
        lock_path = self.lock_path(tool_id)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired tool lock: {lock_path}")
                yield
                logger.debug(f"Released tool lock: {lock_path}")
        except Timeout as e:
            logger.error(
                f"Could not acquire install lock for {tool_id} after {timeout}s. "
                "Another process may be installing this tool."
            )
            raise InstallLockTimeoutError(tool_id, str(lock_path), timeout) from e


__all__ = ["LockManager"]
