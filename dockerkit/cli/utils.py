"""
Shared utilities for CLI commands.

This module provides common functionality used across multiple CLI commands.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dockerkit.config.parser import DockerKitConfig, load_config
from dockerkit.core.environment import Worktree
from dockerkit.core.exceptions import ConfigError
from dockerkit.extension import DockerExtension

logger = logging.getLogger(__name__)


# ============================================================================
# Extension Construction
# ============================================================================


def load_cli_config(args) -> DockerKitConfig:
    """
    Load configuration named by --config, or the default config file.

    An explicit --config path must exist.
    """
    config_path = getattr(args, "config", None)
    return load_config(config_path, required=config_path is not None)


def build_extension(args) -> DockerExtension:
    """Create a DockerExtension from parsed CLI arguments."""
    return DockerExtension.from_config(load_cli_config(args))


def resolve_worktree(path: Optional[Path] = None) -> Worktree:
    """
    Resolve the worktree for a command.

    Args:
        path: Optional worktree root (defaults to current directory)

    Returns:
        Worktree rooted at the resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Worktree(Path(path).resolve())


# ============================================================================
# JSON Input / Output
# ============================================================================


def read_json_argument(value: Optional[str]) -> Any:
    """
    Decode a JSON command argument.

    `-` or a missing value reads the document from stdin; a value starting
    with `@` names a file to read.

    Raises:
        ConfigError: If the document is not valid JSON
    """
    if value is None or value == "-":
        text = sys.stdin.read()
        source = "stdin"
    elif value.startswith("@"):
        path = Path(value[1:])
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read {path}: {e}") from e
        source = str(path)
    else:
        text = value
        source = "argument"

    try:
        return json.loads(text)
    except ValueError as e:
        raise ConfigError(f"Invalid JSON from {source}: {e}") from e


def print_json(data: Any, file=None):
    """Print a JSON document to stdout."""
    print(json.dumps(data, indent=2, sort_keys=True), file=file)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
