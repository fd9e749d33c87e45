"""
Debug adapter commands.

- dap-request-kind: classify a raw debug configuration
- dap-scenario: convert a launch configuration into a buildx scenario
- dap-binary: resolve the `docker buildx dap build` invocation for a task
"""

import logging

from dockerkit.cli.utils import (
    build_extension,
    print_error,
    print_json,
    read_json_argument,
    resolve_worktree,
)
from dockerkit.core.exceptions import DockerKitError
from dockerkit.debug.buildx import DebugConfig, DebugTaskDefinition

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run a debug adapter command.

    Args:
        args: Parsed command-line arguments with:
            - command: dap-request-kind, dap-scenario or dap-binary
            - config: JSON document, @FILE, or - for stdin
            - adapter: Debug adapter name (dap-request-kind, dap-binary)
            - adapter_path: User-provided adapter path (dap-binary)

    Returns:
        Exit code (0 for success, 1 on error)
    """
    try:
        data = read_json_argument(args.config)
        extension = build_extension(args)

        if args.command == "dap-request-kind":
            kind = extension.dap_request_kind(args.adapter, data)
            result = {"request": kind.value}
        elif args.command == "dap-scenario":
            scenario = extension.dap_config_to_scenario(DebugConfig.from_dict(data))
            result = scenario.to_dict()
        else:
            binary = extension.get_dap_binary(
                args.adapter,
                DebugTaskDefinition.from_dict(data),
                args.adapter_path,
                resolve_worktree(args.worktree),
            )
            result = binary.to_dict()
    except DockerKitError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print_error(str(e))
        return 1

    print_json(result)
    return 0
