"""
Network download manager with retry logic.

This module provides the local FileTransfer implementation:
- HTTP/HTTPS downloads with TLS verification via requests
- Retry logic with exponential backoff
- Downloads land in a sibling '.part' file and are renamed into place,
  so an interrupted transfer never looks like a valid binary
- Optional unpacking (gzip, tar.gz, zip) at the destination
"""

import logging
import time
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from dockerkit.core.exceptions import DownloadError, FilesystemError, MakeExecutableError
from dockerkit.core.filesystem import extract_archive, gunzip_file, make_executable
from dockerkit.core.interfaces import DownloadedFileType, FileTransfer

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_file(
    url: str,
    destination: Path,
    timeout: int = 30,
    max_retries: int = 3,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download file from URL to destination with retry logic.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts
        session: Optional requests session to reuse

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails after retries
        ValueError: If URL or destination is invalid
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")
    http = session or requests

    for attempt in range(max_retries):
        try:
            _stream_to_file(http, url, partial, timeout)
            partial.replace(destination)
            logger.info(f"Download complete: {destination}")
            return destination
        except (RequestException, OSError) as e:
            partial.unlink(missing_ok=True)
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download of {url} failed after {max_retries} attempts: {e}"
                ) from e

            backoff_seconds = 2**attempt
            logger.warning(
                f"Download attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)

    raise DownloadError(f"Download of {url} failed for unknown reason")


def _stream_to_file(http, url: str, target: Path, timeout: int) -> None:
    logger.info(f"Downloading from {url}")

    response = http.get(url, stream=True, timeout=timeout, allow_redirects=True)
    response.raise_for_status()

    written = 0
    with open(target, "wb") as f:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if chunk:
                f.write(chunk)
                written += len(chunk)

    logger.debug(f"Wrote {written} bytes to {target}")


class HttpFileTransfer(FileTransfer):
    """
    FileTransfer backed by requests and the local filesystem.

    Example:
        >>> transfer = HttpFileTransfer(timeout=30, max_retries=3)
        >>> transfer.download_file(url, Path("tool"), DownloadedFileType.UNCOMPRESSED)
        >>> transfer.make_executable(Path("tool"))
    """

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session

    def download_file(
        self,
        url: str,
        destination: Path,
        file_type: DownloadedFileType = DownloadedFileType.UNCOMPRESSED,
    ) -> None:
        destination = Path(destination)

        if file_type is DownloadedFileType.UNCOMPRESSED:
            download_file(
                url, destination, self.timeout, self.max_retries, self.session
            )
            return

        staging = destination.with_name(destination.name + ".download")
        download_file(url, staging, self.timeout, self.max_retries, self.session)
        try:
            if file_type is DownloadedFileType.GZIP:
                gunzip_file(staging, destination)
            else:
                extract_archive(staging, destination)
        except FilesystemError as e:
            raise DownloadError(f"Failed to unpack {url}: {e}") from e
        finally:
            staging.unlink(missing_ok=True)

    def make_executable(self, path: Path) -> None:
        try:
            make_executable(path)
        except FilesystemError as e:
            raise MakeExecutableError(str(e)) from e


__all__ = ["download_file", "HttpFileTransfer", "DownloadError"]
