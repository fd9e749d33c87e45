"""
Directory structure management for dockerkit.

Work Directory (~/.dockerkit/ or %USERPROFILE%\\.dockerkit\\, or $DOCKERKIT_HOME):
    - {tool_id}-{version}/  : One directory per installed binary release
    - node_modules/         : npm-installed language servers
    - lock/                 : Per-tool install lock files
    - settings.yaml         : User-level language server settings
    - config.yaml           : dockerkit configuration
"""

import os
from pathlib import Path

from dockerkit.core.exceptions import DirectoryCreationError, DockerKitError

HOME_ENV_VAR = "DOCKERKIT_HOME"


def get_global_cache_dir() -> Path:
    """
    Get the work directory where tools are installed.

    Returns:
        Path: $DOCKERKIT_HOME if set, otherwise
            - Windows: %USERPROFILE%\\.dockerkit
            - Linux/macOS: ~/.dockerkit
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DockerKitError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine dockerkit work directory."
            )
        return Path(user_profile) / ".dockerkit"
    return Path.home() / ".dockerkit"


def ensure_work_dir(work_dir: Path) -> Path:
    """
    Create the work directory and its lock/ subdirectory.

    Raises:
        DirectoryCreationError: If creation fails
    """
    for path in (work_dir, work_dir / "lock"):
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(
                f"Failed to create directory at {path}: {e}"
            ) from e
    return work_dir


__all__ = ["get_global_cache_dir", "ensure_work_dir", "HOME_ENV_VAR"]
