"""
Fake collaborators for testing dockerkit components.

This package provides in-memory implementations of the host interfaces so
the resolution pipeline can be tested without network, npm or a real PATH.
"""

from .host import FakeEnvironment, FakeSettings, RecordingStatus
from .network import FakeRegistry, FakeReleaseIndex, FakeTransfer, make_release

__all__ = [
    "FakeEnvironment",
    "FakeSettings",
    "RecordingStatus",
    "FakeRegistry",
    "FakeReleaseIndex",
    "FakeTransfer",
    "make_release",
]
