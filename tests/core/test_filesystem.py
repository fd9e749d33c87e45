"""
Tests for filesystem helpers.
"""

import io
import os
import tarfile
import zipfile

import pytest

from dockerkit.core.exceptions import FilesystemError
from dockerkit.core.filesystem import (
    InsecureArchiveError,
    extract_archive,
    find_executable,
    is_relative_to,
    safe_rmtree,
)


class TestSafeRmtree:
    """Test safe_rmtree()."""

    def test_removes_directory_under_prefix(self, temp_dir):
        """Test removal of a directory inside the required prefix."""
        target = temp_dir / "tool-v1"
        (target / "sub").mkdir(parents=True)
        (target / "sub" / "file").write_text("x")

        safe_rmtree(target, require_prefix=temp_dir)

        assert not target.exists()

    def test_refuses_outside_prefix(self, temp_dir):
        """Test paths outside the prefix are refused."""
        outside = temp_dir / "outside"
        outside.mkdir()
        prefix = temp_dir / "work"
        prefix.mkdir()

        with pytest.raises(ValueError, match="Refusing to delete"):
            safe_rmtree(outside, require_prefix=prefix)

        assert outside.exists()

    def test_refuses_prefix_itself(self, temp_dir):
        """Test the prefix directory itself is never removed."""
        with pytest.raises(ValueError):
            safe_rmtree(temp_dir, require_prefix=temp_dir)

    def test_missing_directory_is_noop(self, temp_dir):
        """Test removing a missing directory does nothing."""
        safe_rmtree(temp_dir / "missing", require_prefix=temp_dir)

    def test_file_is_rejected(self, temp_dir):
        """Test a regular file is not removed."""
        file_path = temp_dir / "file"
        file_path.write_text("x")

        with pytest.raises(FilesystemError, match="not a directory"):
            safe_rmtree(file_path, require_prefix=temp_dir)


class TestFindExecutable:
    """Test find_executable()."""

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_finds_executable_in_search_paths(self, temp_dir):
        """Test lookup in explicit search paths."""
        tool = temp_dir / "docker-language-server"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(0o755)

        assert find_executable("docker-language-server", [temp_dir]) == tool

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_ignores_non_executable(self, temp_dir):
        """Test files without execute permission are skipped."""
        tool = temp_dir / "docker-language-server"
        tool.write_text("data")
        tool.chmod(0o644)

        assert find_executable("docker-language-server", [temp_dir]) is None

    def test_empty_search_path(self):
        """Test an empty search path finds nothing."""
        assert find_executable("docker-language-server", []) is None


class TestExtractArchive:
    """Test extract_archive()."""

    def test_extracts_tarball(self, temp_dir):
        """Test .tar.gz extraction."""
        archive = temp_dir / "tool.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            data = b"content"
            info = tarfile.TarInfo("bin/tool")
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))

        dest = extract_archive(archive, temp_dir / "out")

        assert (dest / "bin" / "tool").read_bytes() == b"content"

    def test_rejects_path_traversal(self, temp_dir):
        """Test members escaping the destination are rejected."""
        archive = temp_dir / "evil.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("../escape.txt", "x")

        with pytest.raises(InsecureArchiveError):
            extract_archive(archive, temp_dir / "out")

        assert not (temp_dir / "escape.txt").exists()


def test_is_relative_to(temp_dir):
    """Test is_relative_to() for child and sibling paths."""
    assert is_relative_to(temp_dir / "a" / "b", temp_dir)
    assert not is_relative_to(temp_dir.parent, temp_dir)
