"""Docker language server (docker/docker-language-server release binaries)."""

import logging

from dockerkit.core.environment import Worktree
from dockerkit.core.interfaces import SettingsProvider
from dockerkit.language_servers.base import Command, LanguageServer
from dockerkit.tools.installer import BinaryReleaseInstaller, BinaryTool

logger = logging.getLogger(__name__)

DOCKER_LANGUAGE_SERVER = BinaryTool(
    tool_id="docker-language-server",
    repository="docker/docker-language-server",
    asset_name="docker-language-server",
    binary_name="docker-language-server",
)

DEFAULT_ARGS = ["start", "--stdio"]


class DockerLanguageServer(LanguageServer):
    """
    Launches docker-language-server.

    A user-configured binary path bypasses resolution entirely; otherwise the
    binary comes from PATH, the cache, or the latest GitHub release.
    """

    LANGUAGE_SERVER_ID = DOCKER_LANGUAGE_SERVER.tool_id

    def __init__(self, settings: SettingsProvider, installer: BinaryReleaseInstaller):
        super().__init__(settings)
        self.installer = installer

    def language_server_command(self, worktree: Worktree) -> Command:
        binary = self.binary_settings(worktree)

        args = list(DEFAULT_ARGS)
        env = {}
        if binary is not None:
            if binary.arguments is not None:
                args = list(binary.arguments)
            if binary.env is not None:
                env = dict(binary.env)
            if binary.path:
                logger.debug(f"Using configured {self.LANGUAGE_SERVER_ID} binary: {binary.path}")
                return Command(command=binary.path, args=args, env=env)

        binary_path = self.installer.resolve(worktree)
        return Command(command=str(binary_path), args=args, env=env)
