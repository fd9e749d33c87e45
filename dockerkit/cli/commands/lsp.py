"""
Language server commands.

- lsp-command: resolve (installing when needed) the server start command
- init-options: initialization options from the LSP settings
- workspace-config: workspace configuration from the LSP settings
"""

import logging

from dockerkit.cli.utils import build_extension, print_error, print_json, resolve_worktree
from dockerkit.core.exceptions import DockerKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run a language server command.

    Args:
        args: Parsed command-line arguments with:
            - command: lsp-command, init-options or workspace-config
            - server_id: Language server id
            - worktree: Optional worktree root

    Returns:
        Exit code (0 for success, 1 on error)
    """
    try:
        extension = build_extension(args)
        worktree = resolve_worktree(args.worktree)

        if args.command == "lsp-command":
            result = extension.language_server_command(args.server_id, worktree).to_dict()
        elif args.command == "init-options":
            result = extension.language_server_initialization_options(
                args.server_id, worktree
            )
        else:
            result = extension.language_server_workspace_configuration(
                args.server_id, worktree
            )
    except DockerKitError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print_error(str(e))
        return 1

    print_json(result)
    return 0
