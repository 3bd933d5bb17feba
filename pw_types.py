# pw_types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


METADATA_INTERFACE = "PipeWire:Interface:Metadata"
NODE_INTERFACE = "PipeWire:Interface:Node"
DEVICE_INTERFACE = "PipeWire:Interface:Device"

DEFAULT_SINK_KEY = "default.audio.sink"
VOLUME_PROP_ID = "volume"
OUTPUT_DIRECTION = "Output"


@dataclass(frozen=True)
class OpaqueParam:
    raw: Any


@dataclass(frozen=True)
class MetadataName:
    name: str


@dataclass(frozen=True)
class MetadataEntry:
    key: str
    value: Union[MetadataName, Any]  # raw JSON value when not name-shaped


@dataclass(frozen=True)
class PwMetadata:
    type: str
    entries: Tuple[MetadataEntry, ...]


@dataclass(frozen=True)
class EnumFormat:
    channels: Optional[int]


@dataclass(frozen=True)
class VolumeRange:
    id: str
    min: float
    max: float
    default: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class VolumeState:
    volume: float
    mute: bool
    channel_volumes: Tuple[float, ...]


@dataclass(frozen=True)
class PwNode:
    id: int
    type: str
    name: str                           # info.props["node.name"]
    device_id: Optional[int]            # info.props["device.id"]
    card_profile_device: Optional[int]  # info.props["card.profile.device"]
    enum_format: Tuple[EnumFormat, ...]
    prop_info: Tuple[Union[VolumeRange, OpaqueParam], ...]
    props: Tuple[Union[VolumeState, OpaqueParam], ...]


@dataclass(frozen=True)
class RouteProps:
    mute: bool
    volume_base: float
    channel_volumes: Tuple[float, ...]


@dataclass(frozen=True)
class Route:
    index: int
    direction: str  # "Output" | "Input"
    props: RouteProps


@dataclass(frozen=True)
class PwDevice:
    id: int
    type: str
    routes: Tuple[Route, ...]


@dataclass(frozen=True)
class PwUnknown:
    raw: Any


DumpObject = Union[PwMetadata, PwNode, PwDevice, PwUnknown]
