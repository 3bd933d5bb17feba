# volume_math.py
from __future__ import annotations

import math
import re
from typing import Sequence, Tuple

from pw_errors import InvalidDeltaFormat

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

MUTE_TRANSITIONS = ("on", "off", "toggle")


def is_decimal_percentage(value: str) -> bool:
    if not value.endswith("%"):
        return False
    return _DECIMAL_RE.fullmatch(value[:-1]) is not None


def parse_delta(value: str) -> float:
    """'+1%' -> 1.0, '-0.5%' -> -0.5"""
    if not is_decimal_percentage(value):
        raise InvalidDeltaFormat(value)
    return float(value[:-1])


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def change_channel_volumes(channels: Sequence[float], percent: float) -> Tuple[float, ...]:
    # route volumes live in [0, 1]; every channel moves by the same amount
    increment = percent / 100
    return tuple(clamp(v + increment, 0.0, 1.0) for v in channels)


def change_node_volume(volume: float, lo: float, hi: float, percent: float) -> float:
    increment = percent * (hi - lo) / 100
    return clamp(volume + increment, lo, hi)


def apply_mute(current: bool, transition: str) -> bool:
    if transition == "on":
        return True
    if transition == "off":
        return False
    if transition == "toggle":
        return not current
    raise ValueError(f"unknown mute transition: {transition!r}")


def status_percentage(volume: float, span: float = 1.0) -> int:
    # half rounds up
    return int(math.floor(volume * 100 / span + 0.5))
