"""
dockerkit - Docker language tooling for editors.

Resolves and launches docker-language-server and the Dockerfile language
server, and builds `docker buildx dap build` debug adapter invocations.
"""

from dockerkit.extension import DockerExtension

__all__ = ["DockerExtension"]
