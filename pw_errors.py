# pw_errors.py
from __future__ import annotations

from typing import Optional


class PwVolumeError(RuntimeError):
    pass


class MalformedInput(PwVolumeError):
    pass


class DefaultSinkNotFound(PwVolumeError):
    def __init__(self) -> None:
        super().__init__("failed to determine default audio sink (no 'default.audio.sink' metadata)")


class NodeNotFound(PwVolumeError):
    def __init__(self, sink_name: str) -> None:
        self.sink_name = sink_name
        super().__init__(f"failed to find node for audio sink: {sink_name}")


class DeviceNotFound(PwVolumeError):
    def __init__(self, device_id: Optional[int]) -> None:
        self.device_id = device_id
        if device_id is None:
            super().__init__("sink node does not reference a device (no device.id)")
        else:
            super().__init__(f"failed to find device: {device_id}")


class OutputRouteNotFound(PwVolumeError):
    def __init__(self, device_id: int) -> None:
        self.device_id = device_id
        super().__init__(f"failed to find output route on device: {device_id}")


class NoVolumeChannels(PwVolumeError):
    def __init__(self, device_id: int, route_index: int) -> None:
        self.device_id = device_id
        self.route_index = route_index
        super().__init__(f"no volume channels present (device {device_id}, route {route_index})")


class VolumeRangeNotFound(PwVolumeError):
    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"failed to find 'volume' PropInfo on node: {node_id}")


class InvalidVolumeRange(PwVolumeError):
    def __init__(self, min_value: float, max_value: float) -> None:
        self.min = min_value
        self.max = max_value
        super().__init__(f"invalid volume range: min={min_value} max={max_value}")


class VolumeStateNotFound(PwVolumeError):
    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"failed to find volume Props on node: {node_id}")


class InvalidDeltaFormat(PwVolumeError):
    def __init__(self, delta: str) -> None:
        self.delta = delta
        super().__init__(f'"{delta}" is not a decimal percentage')


class ExternalToolFailure(PwVolumeError):
    """
    A collaborator process (pw-dump, pw-cli) could not be run or did not exit 0.
    `code` is None when it could not be started, negative when killed by a signal.
    """

    def __init__(self, tool: str, code: Optional[int], detail: str = "") -> None:
        self.tool = tool
        self.code = code
        self.detail = detail
        if code is None:
            msg = f"{tool} could not be run"
        elif code < 0:
            msg = f"{tool} terminated by signal {-code}"
        else:
            msg = f"{tool} did not exit successfully (code {code})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    @property
    def exit_status(self) -> int:
        if self.code is None or self.code <= 0:
            return 1
        return self.code
