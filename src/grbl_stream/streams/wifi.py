import asyncio
import logging
import socket
from typing import Optional, Tuple

from ..codes.catalog import Catalog
from ..device.grbl import GrblDevice
from .transport import GrblProtocol

TCP_PORT = 23
CONNECTION_TIMEOUT = 5.0 # seconds

log = logging.getLogger("WiFiStream")


def parse_address(address: str) -> Tuple[str, int]:
    """Splits ``host[:port]``, defaulting to TCP_PORT."""
    host, _, port = address.partition(':')
    return host, int(port) if port else TCP_PORT


async def open_tcp(address: str, catalog: Optional[Catalog] = None) -> GrblDevice:
    """
    Connects to a controller exposed over TCP (telnet bridge, ESP32 firmware).
    Raises OSError on failure.
    """
    loop = asyncio.get_running_loop()
    device = GrblDevice(catalog=catalog)
    host, port = parse_address(address)

    log.debug(f"Attempting to connect to {host}:{port}...")
    try:
        transport, _ = await asyncio.wait_for(
            loop.create_connection(lambda: GrblProtocol(device), host, port),
            timeout=CONNECTION_TIMEOUT,
        )
    except (asyncio.TimeoutError, OSError) as e:
        log.error(f"WiFi connection error: {e}")
        raise OSError(f"Failed to connect to WiFi device {address}: {e}") from e

    sock = transport.get_extra_info('socket')
    if sock is not None:
        # Disable Nagle's algorithm so short command lines go out immediately
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

    log.info(f"WiFi connection established successfully to {host}:{port}")
    return device
