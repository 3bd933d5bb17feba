# pw_command.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence, Tuple

from models import (
    Command,
    DeviceRouteTarget,
    NodePropsCommand,
    RouteCommand,
    VolumeTarget,
)
from volume_math import status_percentage


def build_route_command(target: DeviceRouteTarget, mute: bool, channel_volumes: Sequence[float]) -> RouteCommand:
    node = target.node
    # the Route param's "device" is the card profile device; fall back to the device object id
    device = node.card_profile_device if node.card_profile_device is not None else target.device.id
    return RouteCommand(
        index=target.route.index,
        device=device,
        mute=mute,
        channel_volumes=tuple(channel_volumes),
    )


def build_node_command(
    mute: bool,
    volume: Optional[float] = None,
    channel_volumes: Optional[Sequence[float]] = None,
) -> NodePropsCommand:
    return NodePropsCommand(
        mute=mute,
        volume=volume,
        channel_volumes=tuple(channel_volumes) if channel_volumes is not None else None,
    )


def command_payload(cmd: Command) -> Dict[str, Any]:
    if isinstance(cmd, RouteCommand):
        return {
            "index": cmd.index,
            "device": cmd.device,
            "props": {
                "mute": cmd.mute,
                "channelVolumes": list(cmd.channel_volumes),
            },
        }

    out: Dict[str, Any] = {"mute": cmd.mute}
    if cmd.volume is not None:
        out["volume"] = cmd.volume
    if cmd.channel_volumes is not None:
        out["channelVolumes"] = list(cmd.channel_volumes)
    return out


def encode_command(cmd: Command) -> str:
    return json.dumps(command_payload(cmd), separators=(",", ":"))


def command_target(target: VolumeTarget) -> Tuple[int, str]:
    """(object id, param name) for `pw-cli set-param`."""
    if isinstance(target, DeviceRouteTarget):
        return target.device.id, "Route"
    return target.node.id, "Props"


def target_percentage(target: VolumeTarget) -> int:
    if isinstance(target, DeviceRouteTarget):
        # assumes that all channels have the same volume
        return status_percentage(target.channel_volumes[0])
    return status_percentage(target.state.volume, target.volume_range.span)


def encode_status(target: VolumeTarget) -> str:
    if target.mute:
        return json.dumps({"alt": "mute", "tooltip": "muted"}, separators=(", ", ":"))
    pct = target_percentage(target)
    return json.dumps({"percentage": pct, "tooltip": f"{pct}%"}, separators=(", ", ":"))
