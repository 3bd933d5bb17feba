# pw_dump.py
from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from pw_cli import pw_dump_bytes
from pw_errors import MalformedInput
from pw_types import (
    DumpObject,
    EnumFormat,
    MetadataEntry,
    MetadataName,
    OpaqueParam,
    PwDevice,
    PwMetadata,
    PwNode,
    PwUnknown,
    Route,
    RouteProps,
    VolumeRange,
    VolumeState,
)

log = logging.getLogger(__name__)

_MISSING = object()


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    # 1e999 parses to inf
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _floats(v: Any) -> Optional[Tuple[float, ...]]:
    if not isinstance(v, list) or not all(_is_number(x) for x in v):
        return None
    return tuple(float(x) for x in v)


def _list_field(d: Dict[str, Any], key: str) -> Optional[List[Any]]:
    # absent -> empty, present but not a list -> no match
    v = d.get(key, _MISSING)
    if v is _MISSING:
        return []
    return v if isinstance(v, list) else None


def metadata_value(raw: Any) -> Any:
    if isinstance(raw, dict) and isinstance(raw.get("name"), str):
        return MetadataName(name=raw["name"])
    return raw


def as_metadata(obj: Any) -> Optional[PwMetadata]:
    if not isinstance(obj, dict):
        return None
    t = obj.get("type")
    md = obj.get("metadata")
    if not isinstance(t, str) or not isinstance(md, list):
        return None

    entries: List[MetadataEntry] = []
    for e in md:
        if not isinstance(e, dict) or not isinstance(e.get("key"), str) or "value" not in e:
            return None
        entries.append(MetadataEntry(key=e["key"], value=metadata_value(e["value"])))
    return PwMetadata(type=t, entries=tuple(entries))


def as_volume_range(raw: Any) -> Optional[VolumeRange]:
    """
    pw-dump nests the bounds under "type":
      {"id": "volume", "name": "Volume", "type": {"default": 1.0, "min": 0.0, "max": 10.0}}
    A flat {"id", "min", "max", "default"} entry is accepted as well.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
        return None
    bounds = raw.get("type")
    if not isinstance(bounds, dict):
        bounds = raw
    lo, hi, default = bounds.get("min"), bounds.get("max"), bounds.get("default")
    if not (_is_number(lo) and _is_number(hi) and _is_number(default)):
        return None
    return VolumeRange(id=raw["id"], min=float(lo), max=float(hi), default=float(default))


def as_volume_state(raw: Any) -> Optional[VolumeState]:
    if not isinstance(raw, dict):
        return None
    vol = raw.get("volume")
    mute = raw.get("mute")
    chans = _floats(raw.get("channelVolumes"))
    if not _is_number(vol) or not isinstance(mute, bool) or chans is None:
        return None
    return VolumeState(volume=float(vol), mute=mute, channel_volumes=chans)


def as_node(obj: Any) -> Optional[PwNode]:
    if not isinstance(obj, dict):
        return None
    oid = obj.get("id")
    t = obj.get("type")
    info = obj.get("info")
    if not _is_int(oid) or not isinstance(t, str) or not isinstance(info, dict):
        return None

    pr = info.get("props")
    if not isinstance(pr, dict) or not isinstance(pr.get("node.name"), str):
        return None

    device_id = pr.get("device.id")
    card_dev = pr.get("card.profile.device")
    if device_id is not None and not _is_int(device_id):
        return None
    if card_dev is not None and not _is_int(card_dev):
        return None

    params = info.get("params", {})
    if not isinstance(params, dict):
        return None
    enum_raw = _list_field(params, "EnumFormat")
    info_raw = _list_field(params, "PropInfo")
    props_raw = _list_field(params, "Props")
    if enum_raw is None or info_raw is None or props_raw is None:
        return None

    enum_format: List[EnumFormat] = []
    for f in enum_raw:
        if not isinstance(f, dict):
            return None
        ch = f.get("channels")
        if ch is not None and not _is_int(ch):
            return None
        enum_format.append(EnumFormat(channels=ch))

    return PwNode(
        id=oid,
        type=t,
        name=pr["node.name"],
        device_id=device_id,
        card_profile_device=card_dev,
        enum_format=tuple(enum_format),
        prop_info=tuple(as_volume_range(p) or OpaqueParam(raw=p) for p in info_raw),
        props=tuple(as_volume_state(p) or OpaqueParam(raw=p) for p in props_raw),
    )


def as_route(raw: Any) -> Optional[Route]:
    if not isinstance(raw, dict):
        return None
    idx = raw.get("index")
    direction = raw.get("direction")
    rp = raw.get("props")
    if not _is_int(idx) or not isinstance(direction, str) or not isinstance(rp, dict):
        return None

    mute = rp.get("mute")
    base = rp.get("volumeBase")
    chans = _floats(rp.get("channelVolumes"))
    if not isinstance(mute, bool) or not _is_number(base) or chans is None:
        return None
    return Route(
        index=idx,
        direction=direction,
        props=RouteProps(mute=mute, volume_base=float(base), channel_volumes=chans),
    )


def as_device(obj: Any) -> Optional[PwDevice]:
    if not isinstance(obj, dict):
        return None
    oid = obj.get("id")
    t = obj.get("type")
    info = obj.get("info")
    if not _is_int(oid) or not isinstance(t, str) or not isinstance(info, dict):
        return None

    params = info.get("params")
    if not isinstance(params, dict) or not isinstance(params.get("Route"), list):
        return None

    routes: List[Route] = []
    for r in params["Route"]:
        route = as_route(r)
        if route is None:
            return None
        routes.append(route)
    return PwDevice(id=oid, type=t, routes=tuple(routes))


# First shape that matches wins. A Node never carries "metadata" and a Device
# never carries "node.name", so real dumps are unambiguous; the order only
# settles hand-made inputs that fit several shapes.
SHAPE_PRIORITY: Tuple[Tuple[str, Callable[[Any], Optional[DumpObject]]], ...] = (
    ("metadata", as_metadata),
    ("node", as_node),
    ("device", as_device),
)


def decode_object(raw: Any) -> DumpObject:
    for _, decode in SHAPE_PRIORITY:
        obj = decode(raw)
        if obj is not None:
            return obj
    return PwUnknown(raw=raw)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name}")


def decode_dump(buf: bytes) -> List[DumpObject]:
    try:
        data = json.loads(buf, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedInput(f"pw-dump output is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedInput("pw-dump output JSON is not a list")

    out = [decode_object(o) for o in data]
    if log.isEnabledFor(logging.DEBUG):
        known = sum(1 for o in out if not isinstance(o, PwUnknown))
        log.debug("decoded %d objects (%d known shapes)", len(out), known)
    return out


def dump_objects(exe: str = "pw-dump") -> List[DumpObject]:
    return decode_dump(pw_dump_bytes(exe))
