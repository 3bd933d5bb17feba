import json

from conftest import example_dump, node_obj, node_prop_dump
from models import DeviceRouteTarget, NodePropsCommand, RouteCommand
from pw_command import (
    build_node_command,
    build_route_command,
    command_target,
    encode_command,
    encode_status,
)
from pw_dump import decode_object
from pw_resolve import resolve


def target_of(objs):
    return resolve([decode_object(o) for o in objs])


class TestEncodeCommand:

    def test_route_command_wire_form(self):
        cmd = RouteCommand(index=0, device=3, mute=False, channel_volumes=(0.6, 0.6))
        assert encode_command(cmd) == '{"index":0,"device":3,"props":{"mute":false,"channelVolumes":[0.6,0.6]}}'

    def test_node_command_omits_unset_fields(self):
        assert encode_command(NodePropsCommand(mute=True)) == '{"mute":true}'
        assert encode_command(NodePropsCommand(mute=False, volume=0.5)) == '{"mute":false,"volume":0.5}'

    def test_node_command_with_channel_volumes(self):
        cmd = NodePropsCommand(mute=False, channel_volumes=(0.25, 0.5))
        assert json.loads(encode_command(cmd)) == {"mute": False, "channelVolumes": [0.25, 0.5]}


class TestBuild:

    def test_route_device_falls_back_to_device_id(self):
        target = target_of(example_dump())
        cmd = build_route_command(target, True, target.channel_volumes)
        assert cmd == RouteCommand(index=0, device=3, mute=True, channel_volumes=(0.5, 0.5))

    def test_route_device_uses_card_profile_device(self):
        objs = example_dump()
        objs[1] = node_obj(7, "alsa_output.example", device_id=3, card_profile_device=1)
        target = target_of(objs)
        assert build_route_command(target, False, (0.1,)).device == 1

    def test_node_command(self):
        assert build_node_command(False, volume=1.0) == NodePropsCommand(mute=False, volume=1.0)

    def test_command_target(self):
        assert command_target(target_of(example_dump())) == (3, "Route")
        assert command_target(target_of(node_prop_dump())) == (101, "Props")


class TestStatus:

    def test_muted(self):
        assert encode_status(target_of(example_dump(mute=True))) == '{"alt":"mute", "tooltip":"muted"}'

    def test_route_percentage(self):
        target = target_of(example_dump(channel_volumes=(0.42, 0.42)))
        assert isinstance(target, DeviceRouteTarget)
        assert encode_status(target) == '{"percentage":42, "tooltip":"42%"}'

    def test_node_percentage_uses_range(self):
        assert encode_status(target_of(node_prop_dump(volume=0.84, hi=2.0))) == '{"percentage":42, "tooltip":"42%"}'

    def test_node_muted(self):
        assert encode_status(target_of(node_prop_dump(mute=True))) == '{"alt":"mute", "tooltip":"muted"}'
