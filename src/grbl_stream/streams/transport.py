import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from ..errors import ConnectionClosedError
from .streams import Stream

if TYPE_CHECKING:
    from ..device.grbl import GrblDevice


class TransportStream(Stream):
    """Adapts an asyncio transport to the Stream protocol."""

    def __init__(self, transport: asyncio.Transport):
        self.transport = transport

    def send(self, data: bytes) -> None:
        if self.transport.is_closing():
            raise ConnectionClosedError("Transport is closing")
        self.transport.write(data)

    def close(self) -> None:
        if not self.transport.is_closing():
            self.transport.close()


class GrblProtocol(asyncio.Protocol):
    """
    asyncio.Protocol that feeds received bytes into a GrblDevice and tears the
    device down when the transport goes away.
    """

    def __init__(self, device: "GrblDevice"):
        self.device = device
        self.log = logging.getLogger("GrblProtocol")

    def connection_made(self, transport) -> None:
        self.log.debug("Connection established")
        self.device.attach(TransportStream(transport))

    def data_received(self, data: bytes) -> None:
        self.log.debug(f"Raw data received: {data!r}")
        self.device.feed(data)

    def connection_lost(self, exc: Optional[Exception]) -> None:
        self.log.debug(f"Connection lost: {exc}")
        reason = f"Connection lost: {exc}" if exc else "Connection closed by peer"
        self.device.destroy(ConnectionClosedError(reason))
