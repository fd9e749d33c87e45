"""
Cross-platform file system utilities for dockerkit.

This module provides the file operations the installers rely on:
- Executable lookup on a search path
- Safe directory deletion restricted to a parent directory
- Marking files executable
- Unpacking downloaded artifacts (gzip, tar.gz, zip) without path traversal
"""

import gzip
import os
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Union

from dockerkit.core.exceptions import FilesystemError

# Platform detection
IS_WINDOWS = os.name == "nt"


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether path is located under parent.

    Args:
        path: Path to check
        parent: Candidate parent directory

    Returns:
        True if path equals parent or is inside it
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def find_executable(
    name: str, search_paths: Optional[Iterable[Union[str, Path]]] = None
) -> Optional[Path]:
    """
    Find an executable in the system PATH or provided search paths.

    Args:
        name: Executable name (e.g., 'docker-language-server', 'node')
        search_paths: Optional directories to search instead of PATH

    Returns:
        Path to executable if found, None otherwise

    Example:
        >>> find_executable('node')
        PosixPath('/usr/bin/node')
    """
    extensions = [""] if not IS_WINDOWS else ["", ".exe", ".bat", ".cmd"]

    if search_paths is None:
        path_env = os.environ.get("PATH", "")
        search_paths = [p for p in path_env.split(os.pathsep) if p]

    for directory in search_paths:
        for ext in extensions:
            exe_path = Path(directory) / f"{name}{ext}"
            if exe_path.is_file() and os.access(exe_path, os.X_OK):
                return exe_path

    return None


# ============================================================================
# Safe File Operations
# ============================================================================


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/home/me/.dockerkit/docker-language-server-v0.1.0',
        ...             require_prefix='/home/me/.dockerkit')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix) or path == require_prefix:
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, target, exc):
                """Error handler for Windows read-only files."""
                if not os.access(target, os.W_OK):
                    os.chmod(target, stat.S_IWRITE)
                    func(target)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except Exception as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def make_executable(path: Union[str, Path]) -> None:
    """
    Add execute permission for user, group and others.

    No-op on Windows, where executability comes from the file extension.

    Raises:
        FilesystemError: If the file is missing or permissions cannot change
    """
    path = Path(path)
    if not path.is_file():
        raise FilesystemError(f"Cannot make non-file executable: {path}")

    if IS_WINDOWS:
        return

    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise FilesystemError(f"Failed to make '{path}' executable: {e}") from e


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(member: str, destination: Path) -> None:
    """Reject archive members that would land outside destination."""
    target = (destination / member).resolve()
    if not is_relative_to(target, destination.resolve()):
        raise InsecureArchiveError(f"Archive member escapes destination: {member}")


def gunzip_file(source: Path, destination: Path) -> Path:
    """Decompress a single gzip file to destination."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        with gzip.open(source, "rb") as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except (OSError, EOFError) as e:
        raise ArchiveExtractionError(f"Failed to decompress {source}: {e}") from e
    return destination


def extract_archive(archive_path: Path, destination: Path) -> Path:
    """
    Extract a .tar.gz or .zip archive into destination.

    Args:
        archive_path: Archive file
        destination: Directory to extract into (created if missing)

    Returns:
        The destination directory

    Raises:
        InsecureArchiveError: If a member would escape destination
        ArchiveExtractionError: If the archive is unreadable
    """
    destination = ensure_directory(destination)

    try:
        if zipfile.is_zipfile(archive_path):
            with zipfile.ZipFile(archive_path) as zf:
                for name in zf.namelist():
                    _validate_archive_path(name, destination)
                zf.extractall(destination)
        else:
            with tarfile.open(archive_path, "r:*") as tf:
                for member in tf.getmembers():
                    _validate_archive_path(member.name, destination)
                if hasattr(tarfile, "data_filter"):
                    tf.extractall(destination, filter="data")
                else:
                    tf.extractall(destination)
    except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


__all__ = [
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "is_relative_to",
    "find_executable",
    "ensure_directory",
    "safe_rmtree",
    "make_executable",
    "gunzip_file",
    "extract_archive",
]
