"""Platform command: show how dockerkit sees the host."""

import logging

from dockerkit.cli.utils import print_error, print_json
from dockerkit.core.exceptions import DockerKitError
from dockerkit.core.platform import describe_platform, detect_host_platform

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Print the detected host platform as JSON.

    Returns:
        Exit code (0 for success, 1 if the host platform is unsupported)
    """
    os_name, arch = detect_host_platform()
    try:
        triple = describe_platform(os_name, arch)
    except DockerKitError as e:
        print_error(str(e), details=f"detected {os_name}/{arch}")
        return 1

    print_json(
        {
            "os": triple.os,
            "arch": triple.arch,
            "executable_extension": triple.executable_extension,
            "artifact_suffix": triple.artifact_suffix(),
        }
    )
    return 0
