"""Configuration and language server settings for dockerkit."""

from .parser import (
    DockerKitConfig,
    GitHubConfig,
    NpmConfig,
    NetworkConfig,
    load_config,
    parse_config,
)
from .settings import BinarySettings, LspSettings, YamlSettingsProvider

__all__ = [
    "DockerKitConfig",
    "GitHubConfig",
    "NpmConfig",
    "NetworkConfig",
    "load_config",
    "parse_config",
    "BinarySettings",
    "LspSettings",
    "YamlSettingsProvider",
]
