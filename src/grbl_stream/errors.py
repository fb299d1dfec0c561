"""
Error types raised by the Grbl protocol core.

Every error carries a ``kind`` so callers can branch on it directly:

    try:
        await device.command("$X")
    except GrblError as e:
        if e.kind is ErrorKind.COMMAND:
            print(e.code, e.message)
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    PROTOCOL = "protocol"
    COMMAND = "command"
    CONNECTION = "connection"


class GrblError(Exception):
    """Base class for all errors raised by grbl_stream."""

    kind: ErrorKind


class ProtocolError(GrblError):
    """Input did not match the expected wire format."""

    kind = ErrorKind.PROTOCOL

    def __init__(self, expected: str, input: Optional[str]):
        super().__init__(f"{expected} (got: {input!r})")
        self.expected = expected
        self.input = input


class CommandError(GrblError):
    """The controller rejected a command with an ``error:<code>`` line."""

    kind = ErrorKind.COMMAND

    def __init__(self, code: str, message: str = "", description: str = ""):
        super().__init__(f"[{message}] {description} (code: {code})")
        self.code = code
        self.message = message
        self.description = description

    @classmethod
    def from_code(cls, code: str, catalog) -> "CommandError":
        row = catalog.error(code)
        if row is None:
            return cls(code)
        return cls(code, row.message, row.description)


class ConnectionClosedError(GrblError):
    """The connection was torn down while a caller was waiting on it."""

    kind = ErrorKind.CONNECTION
