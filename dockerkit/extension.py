"""
Host-facing entry points.

DockerExtension exposes one method per operation the host editor invokes.
It owns the language server launchers (created lazily, one per id), the
local binary cache and the session resolution memo, and wires them to the
host collaborators.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dockerkit.config.parser import DockerKitConfig
from dockerkit.config.settings import YamlSettingsProvider
from dockerkit.core.directory import ensure_work_dir
from dockerkit.core.download import HttpFileTransfer
from dockerkit.core.environment import LocalEnvironment, Worktree
from dockerkit.core.exceptions import UnknownLanguageServerError
from dockerkit.core.interfaces import (
    FileTransfer,
    HostEnvironment,
    PackageRegistry,
    ReleaseIndex,
    SettingsProvider,
    StatusReporter,
)
from dockerkit.core.locking import LockManager
from dockerkit.debug import buildx
from dockerkit.language_servers.base import Command, LanguageServer
from dockerkit.language_servers.docker_language_server import (
    DOCKER_LANGUAGE_SERVER,
    DockerLanguageServer,
)
from dockerkit.language_servers.dockerfile_language_server import (
    DOCKERFILE_LANGUAGE_SERVER,
    DockerfileLanguageServer,
)
from dockerkit.packages.npm import NpmRegistry
from dockerkit.releases.github import GitHubReleaseIndex
from dockerkit.tools.cache import BinaryCache
from dockerkit.tools.installer import BinaryReleaseInstaller
from dockerkit.tools.package_installer import PackageInstaller
from dockerkit.tools.status import LoggingStatusReporter, ResolutionMemo

logger = logging.getLogger(__name__)


class DockerExtension:
    """
    Docker language tooling for a host editor.

    Example:
        >>> extension = DockerExtension.from_config(load_config())
        >>> command = extension.language_server_command(
        ...     "docker-language-server", Worktree(Path.cwd())
        ... )
    """

    def __init__(
        self,
        work_dir: Path,
        settings: SettingsProvider,
        environment: HostEnvironment,
        release_index: ReleaseIndex,
        registry: PackageRegistry,
        transfer: FileTransfer,
        status: StatusReporter,
        lock_manager: Optional[LockManager] = None,
        lock_timeout: float = 300,
    ):
        self.work_dir = Path(work_dir)
        self.settings = settings
        self.environment = environment
        self.release_index = release_index
        self.registry = registry
        self.transfer = transfer
        self.status = status
        self.lock_manager = lock_manager
        self.lock_timeout = lock_timeout

        self.cache = BinaryCache(self.work_dir)
        self.memo = ResolutionMemo()
        self._servers: Dict[str, LanguageServer] = {}

    @classmethod
    def from_config(cls, config: DockerKitConfig) -> "DockerExtension":
        """Build an extension wired to the local collaborators."""
        work_dir = ensure_work_dir(config.work_dir)
        network = config.network
        return cls(
            work_dir=work_dir,
            settings=YamlSettingsProvider(config.user_settings_file),
            environment=LocalEnvironment(),
            release_index=GitHubReleaseIndex.from_env(
                api_url=config.github.api_url,
                token_env=config.github.token_env,
                timeout=network.timeout,
            ),
            registry=NpmRegistry(
                install_dir=work_dir,
                registry_url=config.npm.registry_url,
                npm_command=config.npm.command,
                timeout=network.timeout,
            ),
            transfer=HttpFileTransfer(timeout=network.timeout, max_retries=network.retries),
            status=LoggingStatusReporter(),
            lock_manager=LockManager(work_dir / "lock"),
            lock_timeout=config.lock_timeout,
        )

    # ------------------------------------------------------------------
    # Language servers
    # ------------------------------------------------------------------

    def language_server(self, server_id: str) -> LanguageServer:
        """Get (creating on first use) the launcher for a server id."""
        server = self._servers.get(server_id)
        if server is not None:
            return server

        if server_id == DockerLanguageServer.LANGUAGE_SERVER_ID:
            server = DockerLanguageServer(
                self.settings,
                BinaryReleaseInstaller(
                    DOCKER_LANGUAGE_SERVER,
                    self.environment,
                    self.release_index,
                    self.transfer,
                    self.cache,
                    self.status,
                    lock_manager=self.lock_manager,
                    lock_timeout=self.lock_timeout,
                ),
            )
        elif server_id == DockerfileLanguageServer.LANGUAGE_SERVER_ID:
            server = DockerfileLanguageServer(
                self.settings,
                PackageInstaller(
                    DOCKERFILE_LANGUAGE_SERVER,
                    self.registry,
                    self.status,
                    install_dir=self.work_dir,
                    lock_manager=self.lock_manager,
                    lock_timeout=self.lock_timeout,
                ),
                self.environment,
                self.memo,
            )
        else:
            raise UnknownLanguageServerError(server_id)

        self._servers[server_id] = server
        return server

    def language_server_command(self, server_id: str, worktree: Worktree) -> Command:
        return self.language_server(server_id).language_server_command(worktree)

    def language_server_initialization_options(
        self, server_id: str, worktree: Worktree
    ) -> Optional[Any]:
        return self.settings.lsp_settings(server_id, worktree).initialization_options

    def language_server_workspace_configuration(
        self, server_id: str, worktree: Worktree
    ) -> Optional[Any]:
        return self.settings.lsp_settings(server_id, worktree).settings

    # ------------------------------------------------------------------
    # Debug adapter
    # ------------------------------------------------------------------

    def dap_request_kind(self, adapter_name: str, value: Any) -> buildx.RequestKind:
        return buildx.request_kind(adapter_name, value)

    def dap_config_to_scenario(self, config: buildx.DebugConfig) -> buildx.DebugScenario:
        return buildx.config_to_scenario(config)

    def get_dap_binary(
        self,
        adapter_name: str,
        config: buildx.DebugTaskDefinition,
        user_provided_debug_adapter_path: Optional[str],
        worktree: Worktree,
    ) -> buildx.DebugAdapterBinary:
        if user_provided_debug_adapter_path:
            logger.debug(
                f"Ignoring user-provided adapter path {user_provided_debug_adapter_path}; "
                f"{buildx.ADAPTER_NAME} always runs through docker"
            )
        return buildx.resolve_binary(adapter_name, config, worktree.root_path)


__all__ = ["DockerExtension"]
