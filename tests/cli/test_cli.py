"""
Tests for the dockerkit command-line interface.
"""

import io
import json

import pytest
from unittest.mock import patch

from dockerkit.cli.parser import CLI
from dockerkit.core.exceptions import InstallLockTimeoutError


@pytest.fixture
def cli_env(temp_dir, monkeypatch):
    """Point the work directory at a temp dir and return a worktree root."""
    monkeypatch.setenv("DOCKERKIT_HOME", str(temp_dir / "home"))
    root = temp_dir / "project"
    root.mkdir()
    return root


def _run(capsys, *argv):
    exit_code = CLI().run(list(argv))
    captured = capsys.readouterr()
    return exit_code, captured.out, captured.err


class TestParser:
    """Test argument parsing."""

    def test_no_command_prints_help(self, capsys):
        exit_code, out, _ = _run(capsys)

        assert exit_code == 1
        assert "usage: dockerkit" in out

    def test_global_options(self):
        args = CLI().parse_args(["--verbose", "--worktree", "/repo", "lsp-command", "docker-language-server"])

        assert args.verbose is True
        assert str(args.worktree) == "/repo"
        assert args.server_id == "docker-language-server"

    def test_debug_defaults(self):
        args = CLI().parse_args(["dap-binary", "{}"])

        assert args.adapter == "buildx-dockerfile"
        assert args.adapter_path is None


class TestLspCommands:
    """Test lsp-command, init-options and workspace-config."""

    def test_lsp_command_with_configured_binary(self, capsys, cli_env):
        (cli_env / ".dockerkit.yaml").write_text(
            "lsp:\n"
            "  docker-language-server:\n"
            "    binary:\n"
            "      path: /opt/dls\n"
            "      env: {LOG: debug}\n"
        )

        exit_code, out, _ = _run(
            capsys, "--worktree", str(cli_env), "lsp-command", "docker-language-server"
        )

        assert exit_code == 0
        assert json.loads(out) == {
            "command": "/opt/dls",
            "args": ["start", "--stdio"],
            "env": {"LOG": "debug"},
        }

    def test_unknown_server(self, capsys, cli_env):
        exit_code, out, err = _run(
            capsys, "--worktree", str(cli_env), "lsp-command", "yaml-language-server"
        )

        assert exit_code == 1
        assert out == ""
        assert "unknown language server: yaml-language-server" in err

    def test_install_lock_timeout(self, capsys, cli_env):
        error = InstallLockTimeoutError("docker-language-server", "/tmp/tool.lock", 0.1)

        with patch(
            "dockerkit.extension.DockerExtension.language_server_command", side_effect=error
        ):
            exit_code, out, err = _run(
                capsys, "--worktree", str(cli_env), "lsp-command", "docker-language-server"
            )

        assert exit_code == 1
        assert out == ""
        assert "could not acquire install lock for docker-language-server" in err

    def test_init_options(self, capsys, cli_env):
        (cli_env / ".dockerkit.yaml").write_text(
            "lsp:\n  dockerfile-language-server:\n    initialization_options: {a: 1}\n"
        )

        exit_code, out, _ = _run(
            capsys, "--worktree", str(cli_env), "init-options", "dockerfile-language-server"
        )

        assert exit_code == 0
        assert json.loads(out) == {"a": 1}

    def test_workspace_config_unset_is_null(self, capsys, cli_env):
        exit_code, out, _ = _run(
            capsys, "--worktree", str(cli_env), "workspace-config", "docker-language-server"
        )

        assert exit_code == 0
        assert json.loads(out) is None

    def test_missing_explicit_config(self, capsys, cli_env):
        exit_code, _, err = _run(
            capsys,
            "--config",
            str(cli_env / "missing.yaml"),
            "workspace-config",
            "docker-language-server",
        )

        assert exit_code == 1
        assert "not found" in err


class TestDebugCommands:
    """Test dap-request-kind, dap-scenario and dap-binary."""

    def test_request_kind(self, capsys, cli_env):
        exit_code, out, _ = _run(capsys, "dap-request-kind", '{"request": "launch"}')

        assert exit_code == 0
        assert json.loads(out) == {"request": "launch"}

    def test_attach_request_kind_fails(self, capsys, cli_env):
        exit_code, _, err = _run(capsys, "dap-request-kind", '{"request": "attach"}')

        assert exit_code == 1
        assert "expected `request` to be `launch`" in err

    def test_scenario_from_stdin(self, capsys, cli_env, monkeypatch):
        monkeypatch.setattr(
            "sys.stdin",
            io.StringIO(
                json.dumps(
                    {
                        "label": "Debug",
                        "adapter": "buildx-dockerfile",
                        "request": "launch",
                        "program": "/repo/Dockerfile",
                    }
                )
            ),
        )

        exit_code, out, _ = _run(capsys, "dap-scenario", "-")

        assert exit_code == 0
        scenario = json.loads(out)
        assert scenario["label"] == "Debug"
        assert json.loads(scenario["config"])["dockerfile"] == "/repo/Dockerfile"

    def test_binary(self, capsys, cli_env):
        task = json.dumps({"label": "Debug", "config": {"request": "launch"}})

        exit_code, out, _ = _run(capsys, "--worktree", str(cli_env), "dap-binary", task)

        assert exit_code == 0
        binary = json.loads(out)
        assert binary["command"] == "docker"
        assert binary["arguments"] == ["buildx", "dap", "build"]
        assert binary["envs"] == {"BUILDX_EXPERIMENTAL": "1"}
        assert binary["request_args"]["request"] == "launch"

    def test_invalid_json_argument(self, capsys, cli_env):
        exit_code, _, err = _run(capsys, "dap-binary", "{not json")

        assert exit_code == 1
        assert "Invalid JSON" in err


class TestPlatformCommand:
    """Test the platform command."""

    @patch("dockerkit.cli.commands.platform.detect_host_platform", return_value=("mac", "aarch64"))
    def test_supported(self, mock_detect, capsys):
        exit_code, out, _ = _run(capsys, "platform")

        assert exit_code == 0
        assert json.loads(out) == {
            "os": "mac",
            "arch": "aarch64",
            "executable_extension": "",
            "artifact_suffix": "darwin-arm64",
        }

    @patch("dockerkit.cli.commands.platform.detect_host_platform", return_value=("linux", "x86"))
    def test_unsupported(self, mock_detect, capsys):
        exit_code, _, err = _run(capsys, "platform")

        assert exit_code == 1
        assert "unsupported architecture" in err
