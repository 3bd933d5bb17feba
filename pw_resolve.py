# pw_resolve.py
from __future__ import annotations

import logging
from typing import Sequence

from models import DeviceRouteTarget, NodePropTarget, VolumeTarget
from pw_errors import (
    DefaultSinkNotFound,
    DeviceNotFound,
    InvalidVolumeRange,
    NodeNotFound,
    NoVolumeChannels,
    OutputRouteNotFound,
    PwVolumeError,
    VolumeRangeNotFound,
    VolumeStateNotFound,
)
from pw_types import (
    DEFAULT_SINK_KEY,
    DEVICE_INTERFACE,
    METADATA_INTERFACE,
    NODE_INTERFACE,
    OUTPUT_DIRECTION,
    VOLUME_PROP_ID,
    DumpObject,
    MetadataName,
    PwDevice,
    PwMetadata,
    PwNode,
    VolumeRange,
    VolumeState,
)

log = logging.getLogger(__name__)

_ROUTE_ERRORS = (DeviceNotFound, OutputRouteNotFound, NoVolumeChannels)


def find_default_sink(objects: Sequence[DumpObject]) -> str:
    # any Metadata object may carry the key, not only the first one
    for o in objects:
        if not isinstance(o, PwMetadata) or o.type != METADATA_INTERFACE:
            continue
        for e in o.entries:
            if e.key == DEFAULT_SINK_KEY and isinstance(e.value, MetadataName):
                log.debug("default audio sink: %s", e.value.name)
                return e.value.name
    raise DefaultSinkNotFound()


def find_sink_node(objects: Sequence[DumpObject], sink_name: str) -> PwNode:
    for o in objects:
        if isinstance(o, PwNode) and o.type == NODE_INTERFACE and o.name == sink_name:
            log.debug("sink node: id %d", o.id)
            return o
    raise NodeNotFound(sink_name)


def resolve_device_route(objects: Sequence[DumpObject], node: PwNode) -> DeviceRouteTarget:
    device_id = node.device_id
    if device_id is None:
        raise DeviceNotFound(None)

    device = next(
        (o for o in objects if isinstance(o, PwDevice) and o.type == DEVICE_INTERFACE and o.id == device_id),
        None,
    )
    if device is None:
        raise DeviceNotFound(device_id)

    route = next((r for r in device.routes if r.direction == OUTPUT_DIRECTION), None)
    if route is None:
        raise OutputRouteNotFound(device_id)

    if not route.props.channel_volumes:
        raise NoVolumeChannels(device_id, route.index)

    log.debug("output route: device %d index %d", device_id, route.index)
    return DeviceRouteTarget(node=node, device=device, route=route)


def resolve_node_props(node: PwNode) -> NodePropTarget:
    vr = next((p for p in node.prop_info if isinstance(p, VolumeRange) and p.id == VOLUME_PROP_ID), None)
    if vr is None:
        raise VolumeRangeNotFound(node.id)
    if vr.span <= 0:
        raise InvalidVolumeRange(vr.min, vr.max)

    state = next((p for p in node.props if isinstance(p, VolumeState)), None)
    if state is None:
        raise VolumeStateNotFound(node.id)

    log.debug("node volume props: id %d range [%s, %s]", node.id, vr.min, vr.max)
    return NodePropTarget(node=node, volume_range=vr, state=state)


def resolve(objects: Sequence[DumpObject]) -> VolumeTarget:
    """
    Locate the volume control of the default audio sink.

    The device's first Output route is tried first, then the node's own
    volume Props. When both fail, a node that names a device reports the
    route error and any other node reports the Props error.
    """
    sink_name = find_default_sink(objects)
    node = find_sink_node(objects, sink_name)
    try:
        return resolve_device_route(objects, node)
    except _ROUTE_ERRORS as route_err:
        try:
            target = resolve_node_props(node)
        except PwVolumeError:
            if node.device_id is None:
                raise
            raise route_err from None
        log.debug("no usable route (%s), using node props", route_err)
        return target
