"""
Startup state machine for a Grbl connection.

The controller first prints a version banner, then a free-form unlock
notice, then ordinary traffic. ``advance`` is the whole transition table;
it performs no I/O so the sequence can be tested on its own.
"""

import re
from enum import Enum
from typing import NamedTuple, Tuple

from ..errors import ProtocolError

# Grbl 1.1f ['$' for help]
VERSION_PATTERN = re.compile(r"^Grbl (\d+\.\d+[a-zA-Z]) \['\$' for help\]$")

EVENT_VERSION = "version"
EVENT_MESSAGE = "message"


class BootState(Enum):
    AWAITING_VERSION = 1
    AWAITING_UNLOCK_NOTICE = 2
    STEADY = 3


class BootEvent(NamedTuple):
    kind: str
    payload: str


def advance(state: BootState, line: str) -> Tuple[BootState, BootEvent]:
    """Returns the next state and the event ``line`` produces in ``state``."""
    if state is BootState.AWAITING_VERSION:
        match = VERSION_PATTERN.match(line)
        if not match:
            raise ProtocolError("Expected version format Grbl <version> ['$' for help]", line)
        return BootState.AWAITING_UNLOCK_NOTICE, BootEvent(EVENT_VERSION, match.group(1))

    # The unlock notice text differs between firmware builds, so it is not validated
    return BootState.STEADY, BootEvent(EVENT_MESSAGE, line)
