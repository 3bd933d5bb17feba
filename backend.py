# backend.py
from __future__ import annotations

import logging
from typing import List, Optional

from models import (
    Change,
    Command,
    DeviceRouteTarget,
    Mute,
    Operation,
    Status,
    VolumeTarget,
)
from pw_cli import pw_cli_set_param
from pw_command import (
    build_node_command,
    build_route_command,
    command_target,
    encode_command,
    encode_status,
)
from pw_dump import dump_objects
from pw_resolve import resolve
from pw_types import DumpObject
from store_config import Settings
from volume_math import (
    apply_mute,
    change_channel_volumes,
    change_node_volume,
    parse_delta,
)

log = logging.getLogger(__name__)


def build_command(target: VolumeTarget, op: Operation) -> Command:
    if isinstance(op, Mute):
        mute = apply_mute(target.mute, op.transition)
        if isinstance(target, DeviceRouteTarget):
            return build_route_command(target, mute, target.channel_volumes)
        return build_node_command(mute)

    if isinstance(op, Change):
        percent = parse_delta(op.delta)
        if isinstance(target, DeviceRouteTarget):
            vols = change_channel_volumes(target.channel_volumes, percent)
            return build_route_command(target, target.mute, vols)
        vr = target.volume_range
        volume = change_node_volume(target.state.volume, vr.min, vr.max, percent)
        return build_node_command(target.mute, volume=volume)

    raise ValueError(f"operation does not build a command: {op!r}")


class PipeWireVolumeBackend:
    def __init__(self, settings: Optional[Settings] = None, dry_run: bool = False) -> None:
        self._settings = settings or Settings()
        self._dry_run = dry_run
        self._objects: List[DumpObject] = []

    def refresh(self) -> None:
        self._objects = dump_objects(self._settings.pw_dump)

    def target(self) -> VolumeTarget:
        return resolve(self._objects)

    def run(self, op: Operation) -> Optional[str]:
        """
        Perform one operation against the default sink.

        Status returns the status line. Mute/Change send one command to
        pw-cli and return None, or return the encoded command on a dry run.
        """
        if isinstance(op, Change):
            parse_delta(op.delta)

        target = self.target()
        if isinstance(op, Status):
            return encode_status(target)

        cmd = build_command(target, op)
        object_id, param = command_target(target)
        payload = encode_command(cmd)
        log.debug("set-param %d %s %s", object_id, param, payload)

        if self._dry_run:
            return payload

        pw_cli_set_param(object_id, param, payload, exe=self._settings.pw_cli)
        return None
