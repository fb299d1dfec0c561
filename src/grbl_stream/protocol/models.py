from dataclasses import dataclass
from typing import Optional


@dataclass
class Coordinates:
    x: float
    y: float
    z: float


@dataclass
class BufferState:
    planner_blocks: int
    rx_bytes: int


@dataclass
class FeedAndSpeed:
    feed_rate: int
    spindle: int


@dataclass
class OverrideValues:
    feed: int
    rapids: int
    spindle: int


@dataclass
class MachineStatus:
    """Decoded ``?`` report. Fields are None when their segment was absent."""

    state: str
    machine_position: Optional[Coordinates] = None
    work_position: Optional[Coordinates] = None
    work_coordinate_offset: Optional[Coordinates] = None
    buffer: Optional[BufferState] = None
    feed_and_speed: Optional[FeedAndSpeed] = None
    pin_state: Optional[str] = None
    override_values: Optional[OverrideValues] = None


@dataclass
class Setting:
    code: str
    value: str
    setting: Optional[str] = None
    units: Optional[str] = None
    description: Optional[str] = None
