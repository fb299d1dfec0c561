"""
Decoders for the payload lines of Grbl query responses.

Each decoder takes the lines collected for a single command (the terminal
``ok`` already removed) and raises ``ProtocolError`` when they do not have
the expected shape.
"""

import re
from typing import Callable, List, Optional, Sequence

from ..codes.catalog import Catalog
from ..errors import ProtocolError
from .models import (
    BufferState,
    Coordinates,
    FeedAndSpeed,
    MachineStatus,
    OverrideValues,
    Setting,
)

# $0=10
SETTING_PATTERN = re.compile(r"^\$([^=]+)=([^ ]*)")
SEGMENT_SEPARATOR = re.compile(r"[:,]")


def _last(lines: Sequence[str]) -> Optional[str]:
    return lines[-1] if lines else None


def parse_message(line: Optional[str], prefix: str) -> str:
    """Strips a ``[PREFIX:...]`` wrapper."""
    prefix = f"[{prefix}:"
    if not line or not line.startswith(prefix) or not line.endswith("]"):
        raise ProtocolError(f"Expected input format {prefix}]", line)
    return line[len(prefix):-1]


def parse_help(lines: Sequence[str]) -> str:
    # [HLP:$$ $# $G $I $N $x=val $Nx=line $J=line $SLP $C $X $H ~ ! ? ctrl-x]
    return parse_message(_last(lines), "HLP")


def parse_settings(lines: Sequence[str], catalog: Catalog) -> List[Setting]:
    settings = []
    for line in lines:
        pair = SETTING_PATTERN.match(line)
        if not pair:
            raise ProtocolError("Expected settings format $x=val", line)

        code = pair.group(1)
        row = catalog.setting(code)
        settings.append(Setting(
            code=code,
            value=pair.group(2),
            setting=row.setting if row else None,
            units=row.units if row else None,
            description=row.description if row else None,
        ))
    return settings


def _numbers(segment: str, values: List[str], count: int, convert: Callable[[str], float]) -> list:
    if len(values) < count:
        raise ProtocolError(f"Expected {count} values in status field", segment)
    try:
        return [convert(value) for value in values[:count]]
    except (ValueError, OverflowError):
        raise ProtocolError("Expected numeric values in status field", segment) from None


def _to_int(value: str) -> int:
    return int(float(value))


def _coordinates(segment: str, values: List[str]) -> Coordinates:
    return Coordinates(*_numbers(segment, values, 3, float))


def parse_status(lines: Sequence[str]) -> MachineStatus:
    # <Alarm|MPos:0.000,0.000,0.000|Bf:14,127|FS:0,0|WCO:0.000,0.000,0.000>
    line = _last(lines)
    if not line or not line.startswith("<") or not line.endswith(">"):
        raise ProtocolError("Expected status format <state|key:values|...>", line)

    segments = line[1:-1].split("|")
    status = MachineStatus(state=segments[0])

    for segment in segments[1:]:
        key, *values = SEGMENT_SEPARATOR.split(segment)

        if key == "MPos":
            status.machine_position = _coordinates(segment, values)
        elif key == "WPos":
            status.work_position = _coordinates(segment, values)
        elif key == "WCO":
            status.work_coordinate_offset = _coordinates(segment, values)
        elif key == "Bf":
            status.buffer = BufferState(*_numbers(segment, values, 2, _to_int))
        elif key == "FS":
            status.feed_and_speed = FeedAndSpeed(*_numbers(segment, values, 2, _to_int))
        elif key == "Pn":
            status.pin_state = values[0] if values else ""
        elif key == "Ov":
            status.override_values = OverrideValues(*_numbers(segment, values, 3, _to_int))
        # Other fields vary between firmware builds and are skipped

    return status
