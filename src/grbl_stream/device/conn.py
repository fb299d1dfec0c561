import logging
from typing import Optional

from ..codes.catalog import Catalog
from ..streams.usb import BAUD_RATE, list_ports, open_serial
from ..streams.wifi import open_tcp
from .grbl import GrblDevice

CONN_USB = 'usb'
CONN_WIFI = 'wifi'


def infer_connection_type(address: str) -> str:
    """An address made of digits, dots and an optional port is a WiFi host."""
    host = address.split(':')[0]
    is_likely_ip = bool(host) and all(c.isdigit() or c == '.' for c in host)
    return CONN_WIFI if is_likely_ip else CONN_USB


def detect_usb_port() -> Optional[str]:
    """Picks the first serial port that looks like a USB controller board."""
    log = logging.getLogger("Connection.auto")
    usb_ports = list_ports()
    if not usb_ports:
        log.info("No USB devices found.")
        return None

    # Arduino clones commonly use CH340 adapters
    candidates = [
        p for p in usb_ports
        if any(tag in p['description'].lower() for tag in ('ch340', 'usb-serial', 'arduino'))
    ]
    selected = candidates[0] if candidates else usb_ports[0]
    log.info(f"Found USB device: {selected['port']} - {selected['description']}")
    return selected['port']


async def connect(address: Optional[str] = None, connection_type: Optional[str] = None,
                  baudrate: int = BAUD_RATE, catalog: Optional[Catalog] = None) -> GrblDevice:
    """
    Opens a GrblDevice over USB or WiFi.

    Args:
        address: Serial port or ``host[:port]``. Auto-detected over USB if omitted.
        connection_type: CONN_USB or CONN_WIFI. Inferred from the address if omitted.
        baudrate: Serial baud rate (USB only).
        catalog: Code catalog to inject, defaults to the bundled one.

    Raises:
        ValueError: No address given and none could be detected.
    """
    log = logging.getLogger("Connection")

    if address is None:
        if connection_type == CONN_WIFI:
            raise ValueError("A WiFi connection requires an address")
        address = detect_usb_port()
        if address is None:
            raise ValueError("No device address given and no USB device detected")
        connection_type = CONN_USB
    elif connection_type is None:
        connection_type = infer_connection_type(address)

    log.info(f"Connecting via {connection_type.upper()} to {address}...")
    if connection_type == CONN_WIFI:
        return await open_tcp(address, catalog=catalog)
    return await open_serial(address, baudrate=baudrate, catalog=catalog)
