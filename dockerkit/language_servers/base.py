"""Shared pieces of the language server launchers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dockerkit.config.settings import BinarySettings
from dockerkit.core.environment import Worktree
from dockerkit.core.exceptions import ConfigError
from dockerkit.core.interfaces import SettingsProvider

logger = logging.getLogger(__name__)


@dataclass
class Command:
    """A process invocation handed back to the host."""

    command: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}


class LanguageServer(ABC):
    """A language server the host can ask to launch."""

    LANGUAGE_SERVER_ID: str = ""

    def __init__(self, settings: SettingsProvider):
        self.settings = settings

    def binary_settings(self, worktree: Worktree) -> Optional[BinarySettings]:
        """
        Read the user's binary override, fresh on every call.

        Unreadable settings are treated as no override.
        """
        try:
            return self.settings.lsp_settings(self.LANGUAGE_SERVER_ID, worktree).binary
        except ConfigError as e:
            logger.warning(f"Ignoring {self.LANGUAGE_SERVER_ID} binary settings: {e}")
            return None

    @abstractmethod
    def language_server_command(self, worktree: Worktree) -> Command:
        """
        Resolve the command that starts this server.

        Raises:
            DockerKitError: If no usable binary can be resolved
        """
        pass
