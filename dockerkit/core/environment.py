"""
Local host environment.

Provides the Worktree value passed through every host call and a
HostEnvironment that answers from the running process: PATH lookup,
platform detection and the Node.js runtime location.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dockerkit.core.exceptions import DockerKitError
from dockerkit.core.filesystem import find_executable
from dockerkit.core.interfaces import HostEnvironment
from dockerkit.core.platform import detect_host_platform

logger = logging.getLogger(__name__)


@dataclass
class Worktree:
    """
    A project root opened in the host.

    Attributes:
        root_path: Absolute project root
        shell_env: Environment of the worktree's shell; its PATH is used for
            executable lookup (falls back to the process PATH)
    """

    root_path: Path
    shell_env: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.root_path = Path(self.root_path)

    def search_path(self) -> list:
        path_env = self.shell_env.get("PATH", os.environ.get("PATH", ""))
        return [p for p in path_env.split(os.pathsep) if p]


class LocalEnvironment(HostEnvironment):
    """HostEnvironment for the current process."""

    def __init__(self, node_path: Optional[str] = None):
        self._node_path = node_path

    def which_on_path(self, name: str, worktree: Worktree) -> Optional[str]:
        found = find_executable(name, worktree.search_path())
        if found:
            logger.debug(f"Found {name} on PATH: {found}")
            return str(found)
        return None

    def current_platform(self) -> Tuple[str, str]:
        return detect_host_platform()

    def node_runtime_path(self) -> str:
        if self._node_path:
            return self._node_path

        found = find_executable("node")
        if found is None:
            raise DockerKitError(
                "Node.js runtime not found on PATH; it is required to run "
                "dockerfile-language-server"
            )
        return str(found)


__all__ = ["Worktree", "LocalEnvironment"]
