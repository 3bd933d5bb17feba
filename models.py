# models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pw_types import PwDevice, PwNode, Route, VolumeRange, VolumeState


@dataclass(frozen=True)
class DeviceRouteTarget:
    node: PwNode
    device: PwDevice
    route: Route  # first "Output" route of `device`

    @property
    def mute(self) -> bool:
        return self.route.props.mute

    @property
    def channel_volumes(self) -> Tuple[float, ...]:
        return self.route.props.channel_volumes


@dataclass(frozen=True)
class NodePropTarget:
    node: PwNode
    volume_range: VolumeRange
    state: VolumeState

    @property
    def mute(self) -> bool:
        return self.state.mute


VolumeTarget = Union[DeviceRouteTarget, NodePropTarget]


@dataclass(frozen=True)
class RouteCommand:
    index: int
    device: int
    mute: bool
    channel_volumes: Tuple[float, ...]


@dataclass(frozen=True)
class NodePropsCommand:
    mute: bool
    volume: Optional[float] = None
    channel_volumes: Optional[Tuple[float, ...]] = None


Command = Union[RouteCommand, NodePropsCommand]


@dataclass(frozen=True)
class Mute:
    transition: str  # "on" | "off" | "toggle"


@dataclass(frozen=True)
class Change:
    delta: str  # "+1%", "-0.5%", ...


@dataclass(frozen=True)
class Status:
    pass


Operation = Union[Mute, Change, Status]
