"""Package registries used by the package-manager install strategy."""

from .npm import NpmRegistry

__all__ = ["NpmRegistry"]
