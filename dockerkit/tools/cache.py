"""
Local binary cache.

Each installed release lives in its own version directory under the work
directory, named `{tool_id}-{version}`. The cache remembers which binary is
current for every tool and retires older version directories once a newer
binary is confirmed on disk.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dockerkit.core.exceptions import DirectoryCreationError, FilesystemError
from dockerkit.core.filesystem import safe_rmtree

logger = logging.getLogger(__name__)

# Version suffix of a version directory: a release tag such as v0.4.1 or 1.2.3-rc1.
VERSION_SUFFIX = re.compile(r"v?\d[\w.+-]*")


@dataclass
class PruneResult:
    """Result of removing outdated version directories."""

    removed: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class BinaryCache:
    """
    Tracks installed tool binaries in a work directory.

    Example:
        >>> cache = BinaryCache(Path.home() / ".dockerkit")
        >>> version_dir = cache.version_directory("docker-language-server", "v0.4.1")
        >>> cache.ensure_directory(version_dir)
        >>> cache.record("docker-language-server", version_dir / "docker-language-server")
        >>> cache.prune_outdated("docker-language-server", keep=version_dir)
    """

    def __init__(self, work_dir: Path):
        """
        Initialize the cache.

        Args:
            work_dir: Directory holding the version directories
        """
        self.work_dir = Path(work_dir)
        self._current: Dict[str, Path] = {}

    @staticmethod
    def has_valid_binary(path: Optional[Path]) -> bool:
        """True iff path exists and is a regular file (symlinks are followed)."""
        if path is None:
            return False
        return Path(path).is_file()

    def version_directory(self, tool_id: str, version: str) -> Path:
        return self.work_dir / f"{tool_id}-{version}"

    def ensure_directory(self, path: Path) -> Path:
        """
        Create a version directory (idempotent).

        Raises:
            DirectoryCreationError: On any I/O error
        """
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(
                f"failed to create directory {path}: {e}"
            ) from e
        return path

    def version_directories(self, tool_id: str) -> List[Path]:
        """
        List every version directory present for a tool.

        Directories of other tools whose id extends this one
        (`foo-bar-1.0` for tool `foo`) are not matched.
        """
        if not self.work_dir.is_dir():
            return []

        prefix = f"{tool_id}-"
        return sorted(
            entry
            for entry in self.work_dir.iterdir()
            if entry.is_dir()
            and entry.name.startswith(prefix)
            and VERSION_SUFFIX.fullmatch(entry.name[len(prefix):])
        )

    def prune_outdated(self, tool_id: str, keep: Path) -> PruneResult:
        """
        Remove all version directories of a tool except `keep`.

        Only call this after the binary inside `keep` is verified, so the
        last known-good version is never removed first. Failures are
        collected, not raised.
        """
        result = PruneResult()
        keep = Path(keep)

        for entry in self.version_directories(tool_id):
            if entry.name == keep.name:
                continue

            try:
                safe_rmtree(entry, require_prefix=self.work_dir)
                result.removed.append(entry)
                logger.info(f"Removed outdated version directory: {entry}")
            except (FilesystemError, ValueError) as e:
                result.failed.append(entry)
                result.errors.append(f"{entry}: {e}")
                logger.warning(f"Failed to remove outdated {tool_id} directory {entry}: {e}")

        return result

    def current(self, tool_id: str) -> Optional[Path]:
        """Get the recorded current binary of a tool, if any."""
        return self._current.get(tool_id)

    def record(self, tool_id: str, binary_path: Path) -> None:
        self._current[tool_id] = Path(binary_path)
        logger.debug(f"Recorded current {tool_id} binary: {binary_path}")

    def forget(self, tool_id: str) -> None:
        self._current.pop(tool_id, None)


__all__ = ["BinaryCache", "PruneResult"]
