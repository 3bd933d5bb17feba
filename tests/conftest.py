import json
from pathlib import Path

import pytest

TESTDATA = Path(__file__).parent / "testdata"


def metadata_obj(sink_name, key="default.audio.sink", oid=40):
    return {
        "id": oid,
        "type": "PipeWire:Interface:Metadata",
        "props": {"metadata.name": "default"},
        "metadata": [
            {"subject": 0, "key": key, "type": "Spa:String:JSON", "value": {"name": sink_name}},
        ],
    }


def node_obj(oid, name, device_id=None, card_profile_device=None, prop_info=None, props=None):
    node_props = {"node.name": name, "media.class": "Audio/Sink"}
    if device_id is not None:
        node_props["device.id"] = device_id
    if card_profile_device is not None:
        node_props["card.profile.device"] = card_profile_device
    return {
        "id": oid,
        "type": "PipeWire:Interface:Node",
        "info": {
            "props": node_props,
            "params": {
                "EnumFormat": [{"mediaType": "audio", "channels": 2}],
                "PropInfo": prop_info if prop_info is not None else [],
                "Props": props if props is not None else [],
            },
        },
    }


def route_obj(index, direction, channel_volumes, mute=False):
    return {
        "index": index,
        "direction": direction,
        "props": {"mute": mute, "volumeBase": 1.0, "channelVolumes": channel_volumes},
    }


def device_obj(oid, routes):
    return {
        "id": oid,
        "type": "PipeWire:Interface:Device",
        "info": {"props": {"media.class": "Audio/Device"}, "params": {"Route": routes}},
    }


def volume_prop_info(lo=0.0, hi=10.0, default=1.0):
    return {"id": "volume", "name": "Volume", "type": {"default": default, "min": lo, "max": hi}}


def volume_props(volume, mute=False, channel_volumes=(1.0, 1.0)):
    return {"volume": volume, "mute": mute, "channelVolumes": list(channel_volumes)}


def example_dump(channel_volumes=(0.5, 0.5), mute=False):
    """alsa_output.example -> node 7 (device.id 3) -> device 3, Output route 0."""
    return [
        metadata_obj("alsa_output.example"),
        node_obj(7, "alsa_output.example", device_id=3),
        device_obj(3, [route_obj(0, "Output", list(channel_volumes), mute=mute)]),
    ]


def node_prop_dump(volume=0.5, mute=False, lo=0.0, hi=2.0):
    return [
        metadata_obj("effect_input.eq"),
        node_obj(
            101,
            "effect_input.eq",
            prop_info=[volume_prop_info(lo, hi)],
            props=[volume_props(volume, mute=mute)],
        ),
    ]


def as_bytes(objs):
    return json.dumps(objs).encode("utf-8")


@pytest.fixture
def testdata():
    def _read(name):
        return (TESTDATA / name).read_bytes()
    return _read
