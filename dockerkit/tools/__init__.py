"""Tool installation: local binary cache and the two install strategies."""

from .cache import BinaryCache, PruneResult
from .installer import BinaryTool, BinaryReleaseInstaller
from .package_installer import PackageTool, PackageInstaller
from .status import LoggingStatusReporter, ResolutionMemo

__all__ = [
    "BinaryCache",
    "PruneResult",
    "BinaryTool",
    "BinaryReleaseInstaller",
    "PackageTool",
    "PackageInstaller",
    "LoggingStatusReporter",
    "ResolutionMemo",
]
