"""
grbl-stream - A streaming protocol engine and CLI for Grbl CNC controllers
"""

__version__ = "0.1.0"

from grbl_stream.codes import Catalog, load_catalog
from grbl_stream.device.grbl import GrblDevice
from grbl_stream.errors import (
    CommandError,
    ConnectionClosedError,
    ErrorKind,
    GrblError,
    ProtocolError,
)
from grbl_stream.events import EventEmitter

# This function is a direct entry point for CLI use
def cli_main():
    """
    Entry point for the CLI command.
    This function is referenced in pyproject.toml
    """
    import sys
    from grbl_stream.main import main
    sys.exit(main())
