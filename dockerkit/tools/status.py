"""Installation status reporting and per-session resolution memo."""

import logging
from typing import Dict, Optional, Set

from dockerkit.core.interfaces import InstallationStatus, StatusReporter

logger = logging.getLogger(__name__)


class LoggingStatusReporter(StatusReporter):
    """StatusReporter that writes status changes to the log."""

    def __init__(self):
        self.last_status: Dict[str, InstallationStatus] = {}

    def set_installation_status(
        self, server_id: str, status: InstallationStatus, detail: str = ""
    ) -> None:
        self.last_status[server_id] = status
        message = f"{server_id}: {status.value.replace('_', ' ')}"
        if detail:
            message += f" ({detail})"

        if status is InstallationStatus.FAILED:
            logger.error(message)
        else:
            logger.info(message)


class ResolutionMemo:
    """
    Tools already resolved during this session.

    Owned by whoever coordinates the language servers and passed into each
    resolution call, so repeated command resolution within one session does
    not hit the package registry again.
    """

    def __init__(self):
        self._resolved: Set[str] = set()

    def is_resolved(self, tool_id: str) -> bool:
        return tool_id in self._resolved

    def mark_resolved(self, tool_id: str) -> None:
        self._resolved.add(tool_id)

    def clear(self, tool_id: Optional[str] = None) -> None:
        if tool_id is None:
            self._resolved.clear()
        else:
            self._resolved.discard(tool_id)


__all__ = ["LoggingStatusReporter", "ResolutionMemo"]
