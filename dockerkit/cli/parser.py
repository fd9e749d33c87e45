"""
dockerkit CLI argument parser.

This module implements the command-line interface for dockerkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("dockerkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

COMMAND_MAP = {
    "lsp-command": "dockerkit.cli.commands.lsp",
    "init-options": "dockerkit.cli.commands.lsp",
    "workspace-config": "dockerkit.cli.commands.lsp",
    "dap-request-kind": "dockerkit.cli.commands.debug",
    "dap-scenario": "dockerkit.cli.commands.debug",
    "dap-binary": "dockerkit.cli.commands.debug",
    "platform": "dockerkit.cli.commands.platform",
}


class CLI:
    """dockerkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="dockerkit",
            description="dockerkit - Docker language servers and buildx debugging",
            epilog='Use "dockerkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"dockerkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ~/.dockerkit/config.yaml)",
        )
        parser.add_argument(
            "--worktree",
            type=Path,
            metavar="PATH",
            default=None,
            help="Worktree root directory (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_lsp_commands(subparsers)
        self._add_debug_commands(subparsers)
        self._add_platform_command(subparsers)

        return parser

    def _add_lsp_commands(self, subparsers):
        """Add language server subcommands."""
        for name, help_text in (
            ("lsp-command", "Resolve the command that starts a language server"),
            ("init-options", "Show initialization options for a language server"),
            ("workspace-config", "Show workspace configuration for a language server"),
        ):
            parser = subparsers.add_parser(name, help=help_text, description=help_text)
            parser.add_argument(
                "server_id",
                metavar="SERVER_ID",
                help="docker-language-server or dockerfile-language-server",
            )

    def _add_debug_commands(self, subparsers):
        """Add debug adapter subcommands."""
        parser = subparsers.add_parser(
            "dap-request-kind",
            help="Classify a debug configuration",
            description="Print the request kind of a raw JSON debug configuration",
        )
        self._add_adapter_argument(parser)
        parser.add_argument(
            "config",
            nargs="?",
            metavar="JSON",
            help="Debug configuration JSON, @FILE, or - for stdin [default: stdin]",
        )

        parser = subparsers.add_parser(
            "dap-scenario",
            help="Convert a debug configuration into a scenario",
            description="Convert a generic launch configuration into a buildx scenario",
        )
        parser.add_argument(
            "config",
            nargs="?",
            metavar="JSON",
            help="Debug configuration JSON, @FILE, or - for stdin [default: stdin]",
        )

        parser = subparsers.add_parser(
            "dap-binary",
            help="Resolve the debug adapter invocation",
            description="Resolve the `docker buildx dap build` invocation for a task",
        )
        self._add_adapter_argument(parser)
        parser.add_argument(
            "config",
            nargs="?",
            metavar="JSON",
            help="Task definition JSON, @FILE, or - for stdin [default: stdin]",
        )
        parser.add_argument(
            "--adapter-path",
            metavar="PATH",
            help="User-provided debug adapter path (ignored by buildx)",
        )

    def _add_adapter_argument(self, parser):
        parser.add_argument(
            "--adapter",
            default="buildx-dockerfile",
            metavar="NAME",
            help="Debug adapter name [default: buildx-dockerfile]",
        )

    def _add_platform_command(self, subparsers):
        """Add 'platform' subcommand."""
        subparsers.add_parser(
            "platform",
            help="Show the detected host platform",
            description="Show the host platform and its release asset suffix",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Logs go to stderr so stdout carries only JSON.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MAP.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
