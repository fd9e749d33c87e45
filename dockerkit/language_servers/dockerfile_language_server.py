"""Dockerfile language server (npm package dockerfile-language-server-nodejs)."""

from dockerkit.core.environment import Worktree
from dockerkit.core.interfaces import HostEnvironment, SettingsProvider
from dockerkit.language_servers.base import Command, LanguageServer
from dockerkit.tools.package_installer import PackageInstaller, PackageTool
from dockerkit.tools.status import ResolutionMemo

DOCKERFILE_LANGUAGE_SERVER = PackageTool(
    tool_id="dockerfile-language-server",
    package_name="dockerfile-language-server-nodejs",
    entry_point="node_modules/dockerfile-language-server-nodejs/bin/docker-langserver",
)


class DockerfileLanguageServer(LanguageServer):
    """Launches the npm-distributed Dockerfile language server under Node."""

    LANGUAGE_SERVER_ID = DOCKERFILE_LANGUAGE_SERVER.tool_id

    def __init__(
        self,
        settings: SettingsProvider,
        installer: PackageInstaller,
        environment: HostEnvironment,
        memo: ResolutionMemo,
    ):
        super().__init__(settings)
        self.installer = installer
        self.environment = environment
        self.memo = memo

    def language_server_command(self, worktree: Worktree) -> Command:
        binary = self.binary_settings(worktree)
        env = dict(binary.env) if binary is not None and binary.env is not None else {}
        user_args = binary.arguments if binary is not None else None

        if binary is not None and binary.path:
            args = list(user_args) if user_args is not None else ["--stdio"]
            return Command(command=binary.path, args=args, env=env)

        entry = self.installer.resolve(self.memo)
        if user_args is not None:
            args = list(user_args)
        else:
            args = [str(entry.absolute()), "--stdio"]

        return Command(command=self.environment.node_runtime_path(), args=args, env=env)
