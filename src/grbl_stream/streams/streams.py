"""
Stream Classes for Communication

Provides the Stream protocol the device writes to, and the asyncio glue that
connects a serial port or TCP socket to a GrblDevice.
"""

from typing import Protocol, runtime_checkable

@runtime_checkable
class Stream(Protocol):
    """Protocol defining the outbound side of a connection (USB, WiFi)."""

    def send(self, data: bytes) -> None:
        """Sends data over the stream."""
        ...

    def close(self) -> None:
        """Closes the stream connection."""
        ...
