"""Language servers provided to the host editor."""

from .base import Command, LanguageServer
from .docker_language_server import DOCKER_LANGUAGE_SERVER, DockerLanguageServer
from .dockerfile_language_server import (
    DOCKERFILE_LANGUAGE_SERVER,
    DockerfileLanguageServer,
)

__all__ = [
    "Command",
    "LanguageServer",
    "DOCKER_LANGUAGE_SERVER",
    "DockerLanguageServer",
    "DOCKERFILE_LANGUAGE_SERVER",
    "DockerfileLanguageServer",
]
