"""
Debug session configuration for the buildx Dockerfile debugger.

The host starts debugging through three calls:

- request_kind(): classify a raw JSON debug config (only `launch` works)
- config_to_scenario(): turn a generic launch request into a scenario whose
  config is the Dockerfile debug payload
- resolve_binary(): build the `docker buildx dap build` invocation, filling
  in the build context and Dockerfile when the payload leaves them unset

Attaching to a running build is not supported by buildx and is always
rejected.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dockerkit.core.exceptions import (
    InvalidDebugConfigError,
    InvalidPathError,
    UnsupportedAdapterError,
    UnsupportedDebugRequestError,
    UnsupportedRequestKindError,
)

logger = logging.getLogger(__name__)

ADAPTER_NAME = "buildx-dockerfile"
DEBUG_COMMAND = "docker"
DEBUG_ARGUMENTS = ("buildx", "dap", "build")
DEBUG_ENV = {"BUILDX_EXPERIMENTAL": "1"}
DEFAULT_DOCKERFILE_NAME = "Dockerfile"


class RequestKind(Enum):
    """Debug adapter request kinds."""

    LAUNCH = "launch"
    ATTACH = "attach"


@dataclass
class LaunchRequest:
    """Start a new debuggee: here, a build of `program` (a Dockerfile)."""

    program: str
    cwd: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class AttachRequest:
    """Attach to a running process."""

    process_id: Optional[int] = None


@dataclass
class DebugConfig:
    """The host's generic debug intent."""

    label: str
    adapter: str
    request: Union[LaunchRequest, AttachRequest]
    stop_on_entry: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict) -> "DebugConfig":
        """
        Parse the host JSON shape:

            {"label": ..., "adapter": ..., "request": "launch",
             "program": ..., "cwd": ..., "args": [...], "env": {...},
             "stop_on_entry": true}
        """
        if not isinstance(data, dict):
            raise InvalidDebugConfigError("debug config must be a JSON object")

        kind = data.get("request")
        if kind == RequestKind.ATTACH.value:
            request: Union[LaunchRequest, AttachRequest] = AttachRequest(
                process_id=data.get("process_id")
            )
        elif kind == RequestKind.LAUNCH.value:
            program = data.get("program")
            if not isinstance(program, str):
                raise InvalidDebugConfigError("launch request requires a `program` string")
            request = LaunchRequest(
                program=program,
                cwd=_optional(data, "cwd", str),
                args=_string_list(data, "args"),
                env={str(k): str(v) for k, v in (_optional(data, "env", dict) or {}).items()},
            )
        else:
            raise UnsupportedRequestKindError(kind)

        return cls(
            label=str(data.get("label", "")),
            adapter=str(data.get("adapter", "")),
            request=request,
            stop_on_entry=_optional(data, "stop_on_entry", bool),
        )


@dataclass
class DebugScenario:
    """A saved debug scenario; `config` is the adapter payload as JSON text."""

    adapter: str
    label: str
    config: str
    tcp_connection: Optional[dict] = None
    build: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "adapter": self.adapter,
            "label": self.label,
            "config": self.config,
            "tcp_connection": self.tcp_connection,
            "build": self.build,
        }


@dataclass
class DebugTaskDefinition:
    """A scenario ready to run; `config` is the adapter payload as JSON text."""

    label: str
    adapter: str
    config: str
    tcp_connection: Optional[dict] = None

    @classmethod
    def from_dict(cls, data: Any) -> "DebugTaskDefinition":
        """Parse a task; an object-valued `config` is re-encoded as JSON text."""
        if not isinstance(data, dict):
            raise InvalidDebugConfigError("debug task must be a JSON object")

        config = data.get("config")
        if not isinstance(config, str):
            config = json.dumps(config)

        return cls(
            label=str(data.get("label", "")),
            adapter=str(data.get("adapter", ADAPTER_NAME)),
            config=config,
            tcp_connection=_optional(data, "tcp_connection", dict),
        )


@dataclass
class DockerfileDebugConfig:
    """
    Payload understood by `docker buildx dap build`.

    Attributes:
        request: Always "launch"
        context_path: Absolute path of the build context
        dockerfile: Absolute path of the Dockerfile being built
        args: Extra build arguments, e.g. ["--build-arg", "X=1"]
        stop_on_entry: Suspend on the first instruction
        target: Build stage to build
    """

    request: str = RequestKind.LAUNCH.value
    context_path: Optional[str] = None
    dockerfile: Optional[str] = None
    args: List[str] = field(default_factory=list)
    stop_on_entry: Optional[bool] = None
    target: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "DockerfileDebugConfig":
        """
        Decode the camelCase JSON payload.

        Raises:
            InvalidDebugConfigError: On missing `request` or wrongly typed fields
        """
        if not isinstance(data, dict):
            raise InvalidDebugConfigError(
                "`config` is not a valid Dockerfile config: expected a JSON object"
            )
        if not isinstance(data.get("request"), str):
            raise InvalidDebugConfigError(
                "`config` is not a valid Dockerfile config: missing string field `request`"
            )

        return cls(
            request=data["request"],
            context_path=_optional(data, "contextPath", str),
            dockerfile=_optional(data, "dockerfile", str),
            args=_string_list(data, "args"),
            stop_on_entry=_optional(data, "stopOnEntry", bool),
            target=_optional(data, "target", str),
        )

    def to_dict(self) -> dict:
        return {
            "contextPath": self.context_path,
            "dockerfile": self.dockerfile,
            "request": self.request,
            "args": list(self.args),
            "stopOnEntry": self.stop_on_entry,
            "target": self.target,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def with_defaults(self, workspace_root: Path) -> "DockerfileDebugConfig":
        """
        Fill in unset fields from the workspace root.

        - context_path defaults to the workspace root
        - dockerfile defaults to {workspace_root}/Dockerfile

        Raises:
            InvalidPathError: If the default Dockerfile path is not valid text
        """
        context_path = self.context_path
        if context_path is None:
            context_path = str(workspace_root)

        dockerfile = self.dockerfile
        if dockerfile is None:
            dockerfile = _path_text(Path(workspace_root) / DEFAULT_DOCKERFILE_NAME)

        return replace(self, context_path=context_path, dockerfile=dockerfile)


@dataclass
class StartDebuggingRequestArguments:
    request: RequestKind
    configuration: str


@dataclass
class DebugAdapterBinary:
    """Final adapter process invocation."""

    command: Optional[str]
    arguments: List[str]
    cwd: Optional[str]
    envs: Dict[str, str]
    request_args: StartDebuggingRequestArguments
    connection: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "arguments": list(self.arguments),
            "cwd": self.cwd,
            "envs": dict(self.envs),
            "request_args": {
                "request": self.request_args.request.value,
                "configuration": self.request_args.configuration,
            },
            "connection": self.connection,
        }


def _optional(data: dict, key: str, kind: type):
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise InvalidDebugConfigError(
            f"`config` is not a valid Dockerfile config: `{key}` must be {kind.__name__}"
        )
    return value


def _string_list(data: dict, key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidDebugConfigError(
            f"`config` is not a valid Dockerfile config: `{key}` must be a list of strings"
        )
    return list(value)


def _path_text(path: Path) -> str:
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathError(f"Dockerfile path contains invalid UTF-8: {path!r}") from e
    return text


def validate_adapter(adapter_name: str) -> None:
    if adapter_name != ADAPTER_NAME:
        raise UnsupportedAdapterError(adapter_name)


def request_kind(adapter_name: str, raw_config: Any) -> RequestKind:
    """
    Classify a raw debug config.

    Raises:
        UnsupportedAdapterError: If the adapter is not buildx-dockerfile
        UnsupportedRequestKindError: For `attach` or any value but `launch`
    """
    validate_adapter(adapter_name)

    request = raw_config.get("request") if isinstance(raw_config, dict) else None
    if request == RequestKind.LAUNCH.value:
        return RequestKind.LAUNCH
    raise UnsupportedRequestKindError(request)


def config_to_scenario(config: DebugConfig) -> DebugScenario:
    """
    Convert a generic launch request into a buildx debug scenario.

    Raises:
        UnsupportedDebugRequestError: For attach requests
    """
    launch = config.request
    if not isinstance(launch, LaunchRequest):
        raise UnsupportedDebugRequestError("attaching to a running build is not supported")

    payload = DockerfileDebugConfig(
        request=RequestKind.LAUNCH.value,
        dockerfile=launch.program,
        context_path=launch.cwd,
        args=list(launch.args),
        stop_on_entry=config.stop_on_entry,
        target=None,
    )

    return DebugScenario(
        adapter=config.adapter,
        label=config.label,
        config=payload.to_json(),
        tcp_connection=None,
        build=None,
    )


def resolve_binary(
    adapter_name: str, task: DebugTaskDefinition, workspace_root: Path
) -> DebugAdapterBinary:
    """
    Build the buildx debug adapter invocation for a task.

    Raises:
        UnsupportedAdapterError: If the adapter is not buildx-dockerfile
        InvalidDebugConfigError: If task.config is not a Dockerfile config
        InvalidPathError: If the default Dockerfile path is not valid text
    """
    validate_adapter(adapter_name)

    try:
        raw = json.loads(task.config)
    except (TypeError, ValueError) as e:
        raise InvalidDebugConfigError(f"`config` is not a valid JSON: {e}") from e

    payload = DockerfileDebugConfig.from_dict(raw).with_defaults(Path(workspace_root))
    logger.debug(f"Resolved buildx debug config: {payload.to_dict()}")

    return DebugAdapterBinary(
        command=DEBUG_COMMAND,
        arguments=[*DEBUG_ARGUMENTS, *payload.args],
        cwd=str(workspace_root),
        envs=dict(DEBUG_ENV),
        request_args=StartDebuggingRequestArguments(
            request=RequestKind.LAUNCH,
            configuration=payload.to_json(),
        ),
        connection=None,
    )
