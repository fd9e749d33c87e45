"""
Language server settings lookup.

Settings are read from YAML on every call, never cached, so edits apply the
next time the host resolves a server command:

    lsp:
      docker-language-server:
        binary:
          path: /usr/local/bin/docker-language-server
          arguments: ["start", "--stdio"]
          env: {LOG_LEVEL: debug}
        initialization_options: {...}
        settings: {...}

The worktree file (<root>/.dockerkit.yaml) takes precedence over the user
file (<work dir>/settings.yaml), per server id.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from dockerkit.core.environment import Worktree
from dockerkit.core.exceptions import ConfigError
from dockerkit.core.interfaces import SettingsProvider

logger = logging.getLogger(__name__)

WORKTREE_SETTINGS_FILE = ".dockerkit.yaml"


@dataclass
class BinarySettings:
    """User override of the language server binary."""

    path: Optional[str] = None
    arguments: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None


@dataclass
class LspSettings:
    """Settings for one language server."""

    binary: Optional[BinarySettings] = None
    initialization_options: Optional[Any] = None
    settings: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: dict, server_id: str = "") -> "LspSettings":
        """
        Build settings from a parsed YAML mapping.

        Raises:
            ConfigError: If a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigError(f"settings for {server_id!r} must be a mapping")

        binary = None
        raw_binary = data.get("binary")
        if raw_binary is not None:
            if not isinstance(raw_binary, dict):
                raise ConfigError(f"{server_id}: 'binary' must be a mapping")
            binary = BinarySettings(
                path=_optional_str(raw_binary.get("path"), f"{server_id}: binary.path"),
                arguments=_optional_str_list(
                    raw_binary.get("arguments"), f"{server_id}: binary.arguments"
                ),
                env=_optional_env(raw_binary.get("env"), f"{server_id}: binary.env"),
            )

        return cls(
            binary=binary,
            initialization_options=data.get("initialization_options"),
            settings=data.get("settings"),
        )


def _optional_str(value, what: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{what} must be a string")
    return value


def _optional_str_list(value, what: str) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{what} must be a list of strings")
    return list(value)


def _optional_env(value, what: str) -> Optional[Dict[str, str]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigError(f"{what} must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


class YamlSettingsProvider(SettingsProvider):
    """SettingsProvider reading the worktree and user YAML files."""

    def __init__(self, user_settings_file: Optional[Path] = None):
        self.user_settings_file = user_settings_file

    def lsp_settings(self, server_id: str, worktree: Worktree) -> LspSettings:
        for settings_file in self._settings_files(worktree):
            servers = _load_lsp_section(settings_file)
            if server_id in servers:
                logger.debug(f"Using {server_id} settings from {settings_file}")
                return LspSettings.from_dict(servers[server_id] or {}, server_id)
        return LspSettings()

    def _settings_files(self, worktree: Worktree) -> List[Path]:
        files = [worktree.root_path / WORKTREE_SETTINGS_FILE]
        if self.user_settings_file is not None:
            files.append(self.user_settings_file)
        return files


def _load_lsp_section(settings_file: Path) -> dict:
    if not settings_file.is_file():
        return {}

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {settings_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{settings_file} must contain a mapping")

    section = data.get("lsp") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'lsp' in {settings_file} must be a mapping")
    return section
