import asyncio
import logging
from typing import Dict, List, Optional

import serial
import serial.tools.list_ports
import serial_asyncio

from ..codes.catalog import Catalog
from ..device.grbl import GrblDevice
from .transport import GrblProtocol

# Constants
BAUD_RATE = 115200

log = logging.getLogger("USBStream")


async def open_serial(port: str, baudrate: int = BAUD_RATE,
                      catalog: Optional[Catalog] = None) -> GrblDevice:
    """
    Opens a serial port and returns a GrblDevice reading from it.
    Raises serial.SerialException on failure.
    """
    loop = asyncio.get_running_loop()
    device = GrblDevice(catalog=catalog)

    log.debug(f"Attempting to open {port} at {baudrate} baud...")
    try:
        transport, _ = await serial_asyncio.create_serial_connection(
            loop, lambda: GrblProtocol(device), port, baudrate=baudrate
        )
    except (serial.SerialException, OSError) as e:
        log.error(f"Serial connection error: {e}")
        raise serial.SerialException(f"Failed to open USB device {port}: {e}") from e

    # Toggling DTR resets the controller so it prints a fresh banner
    try:
        transport.serial.dtr = False
        transport.serial.reset_input_buffer()
        transport.serial.dtr = True
    except (serial.SerialException, OSError) as e:
        log.warning(f"Could not toggle DTR on {port}: {e}")

    log.info(f"Serial port opened successfully: {port}")
    return device


def list_ports() -> List[Dict[str, str]]:
    """List available serial ports."""
    ports = []
    try:
        for port in serial.tools.list_ports.comports():
            ports.append({
                'port': port.device,
                'description': port.description,
                'hwid': port.hwid
            })
    except Exception as e:
        log.error(f"Error listing serial ports: {str(e)}")
    return ports
