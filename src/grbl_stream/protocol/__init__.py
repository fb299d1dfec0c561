from .boot import BootEvent, BootState, advance
from .decoders import parse_help, parse_settings, parse_status
from .framer import DELIMITER, LineFramer
from .models import (
    BufferState,
    Coordinates,
    FeedAndSpeed,
    MachineStatus,
    OverrideValues,
    Setting,
)

__all__ = [
    "BootEvent",
    "BootState",
    "advance",
    "parse_help",
    "parse_settings",
    "parse_status",
    "DELIMITER",
    "LineFramer",
    "BufferState",
    "Coordinates",
    "FeedAndSpeed",
    "MachineStatus",
    "OverrideValues",
    "Setting",
]
