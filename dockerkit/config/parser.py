"""YAML configuration parser for dockerkit.

This module provides parsing and validation for the dockerkit config.yaml
file. Every key is optional; a missing file yields the defaults.

Example config.yaml:

    work_dir: ~/.cache/dockerkit
    github:
      api_url: https://api.github.com
      token_env: GITHUB_TOKEN
    npm:
      registry_url: https://registry.npmjs.org
      command: npm
    network:
      timeout: 30
      retries: 3
    lock_timeout: 300
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from dockerkit.core.directory import get_global_cache_dir
from dockerkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.yaml"


@dataclass
class GitHubConfig:
    """GitHub release index configuration."""

    api_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"  # env var holding an optional API token


@dataclass
class NpmConfig:
    """npm registry configuration."""

    registry_url: str = "https://registry.npmjs.org"
    command: str = "npm"


@dataclass
class NetworkConfig:
    """Network behaviour for downloads and index queries."""

    timeout: int = 30
    retries: int = 3


@dataclass
class DockerKitConfig:
    """Complete dockerkit configuration."""

    work_dir: Path = field(default_factory=get_global_cache_dir)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    npm: NpmConfig = field(default_factory=NpmConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    lock_timeout: float = 300

    @property
    def user_settings_file(self) -> Path:
        return self.work_dir / "settings.yaml"


def default_config_path() -> Path:
    return get_global_cache_dir() / CONFIG_FILE_NAME


def load_config(config_path: Optional[Path] = None, required: bool = False) -> DockerKitConfig:
    """
    Load dockerkit configuration.

    Args:
        config_path: Path to config.yaml (default: <work dir>/config.yaml)
        required: If True, a missing file is an error

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid or a required file is missing
    """
    config_path = Path(config_path) if config_path else default_config_path()

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        logger.debug(f"Config file not found (optional): {config_path}")
        return DockerKitConfig()

    logger.debug(f"Loading configuration from {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e

    return parse_config(data or {})


def parse_config(data: dict) -> DockerKitConfig:
    """Parse and validate a configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    config = DockerKitConfig()

    if "work_dir" in data:
        if not isinstance(data["work_dir"], str) or not data["work_dir"]:
            raise ConfigError("work_dir must be a non-empty string")
        config.work_dir = Path(data["work_dir"]).expanduser()

    github = _section(data, "github")
    config.github = GitHubConfig(
        api_url=_string(github, "api_url", config.github.api_url).rstrip("/"),
        token_env=_string(github, "token_env", config.github.token_env),
    )

    npm = _section(data, "npm")
    config.npm = NpmConfig(
        registry_url=_string(npm, "registry_url", config.npm.registry_url).rstrip("/"),
        command=_string(npm, "command", config.npm.command),
    )

    network = _section(data, "network")
    config.network = NetworkConfig(
        timeout=_positive(network, "timeout", config.network.timeout),
        retries=_positive(network, "retries", config.network.retries),
    )

    config.lock_timeout = _positive(data, "lock_timeout", config.lock_timeout)
    return config


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _string(section: dict, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def _positive(section: dict, key: str, default):
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"'{key}' must be a positive number, got {value!r}")
    return value
