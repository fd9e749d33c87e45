"""Debug adapter support (docker buildx dap)."""

from .buildx import (
    ADAPTER_NAME,
    AttachRequest,
    DebugAdapterBinary,
    DebugConfig,
    DebugScenario,
    DebugTaskDefinition,
    DockerfileDebugConfig,
    LaunchRequest,
    RequestKind,
    StartDebuggingRequestArguments,
    config_to_scenario,
    request_kind,
    resolve_binary,
)

__all__ = [
    "ADAPTER_NAME",
    "AttachRequest",
    "DebugAdapterBinary",
    "DebugConfig",
    "DebugScenario",
    "DebugTaskDefinition",
    "DockerfileDebugConfig",
    "LaunchRequest",
    "RequestKind",
    "StartDebuggingRequestArguments",
    "config_to_scenario",
    "request_kind",
    "resolve_binary",
]
