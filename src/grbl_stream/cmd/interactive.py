from grbl_stream.device.grbl import GrblDevice
from grbl_stream.errors import CommandError, ErrorKind, GrblError

from .settings import format_settings
from .status import format_status

import asyncio
import atexit
import logging
import os

# Get a logger specific to this module
logger = logging.getLogger(__name__)

try:
    import readline
    readline_available = True
except ImportError:
    readline_available = False
    logger.warning("readline library not found. History functionality will be disabled.")

import platformdirs

PROMPT = "grbl> "


def setup_history():
    """Sets up readline history file in a platform-specific user data directory."""
    if not readline_available:
        print("Note: Readline library not available. Command history disabled.")
        return

    data_dir = platformdirs.user_data_dir("grbl-stream", "grbl-stream")
    history_file = os.path.join(data_dir, "history")

    try:
        os.makedirs(data_dir, exist_ok=True)
        logger.info(f"Ensured history directory exists: {data_dir}")
    except OSError as e:
        print(f"Warning: Could not create history directory: {str(e)}. History disabled.")
        return

    if os.path.exists(history_file):
        try:
            readline.read_history_file(history_file)
        except OSError as e:
            print(f"Warning: Could not read history file '{history_file}': {str(e)}")

    readline.set_history_length(1000)
    atexit.register(readline.write_history_file, history_file)


def print_help():
    """Print help information for interactive mode"""
    print("\nAvailable commands:")
    print("  help      - Show this help information")
    print("  exit      - Exit interactive mode")
    print("  quit      - Same as exit")
    print("  status    - Get machine status")
    print("  settings  - Show all $ settings")
    print("  clear     - Clear the screen")
    print("\nAny other input will be sent as a command to the controller.")
    print("\nCommon controller commands:")
    print("  $         - Controller help")
    print("  $H        - Run homing cycle")
    print("  $X        - Kill alarm lock")
    print("  G21 / G20 - Metric / imperial units")
    print("  G90 / G91 - Absolute / incremental positioning")
    print("\nPress up/down arrows to navigate command history")


async def interactive_mode(device: GrblDevice) -> int:
    """
    Run an interactive shell for communicating with the controller

    Args:
        device: GrblDevice connected to a controller

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    setup_history()
    loop = asyncio.get_running_loop()

    device.on('message', lambda line: print(f"< {line}"))

    print("\nEntering interactive mode. Type 'help' for commands, 'exit' to quit.")
    if device.version:
        print(f"Connected to: Grbl {device.version}")
    else:
        print("Connected")

    while not device.closed:
        try:
            cmd_input = (await loop.run_in_executor(None, input, PROMPT)).strip()

            if not cmd_input:
                continue

            if cmd_input.lower() in ('exit', 'quit'):
                break
            elif cmd_input.lower() == 'help':
                print_help()
            elif cmd_input.lower() == 'status':
                print(format_status(await device.status()))
            elif cmd_input.lower() == 'settings':
                print(format_settings(await device.settings()))
            elif cmd_input.lower() == 'clear':
                os.system('cls' if os.name == 'nt' else 'clear')
            else:
                await device.command(cmd_input)

        except CommandError as e:
            print(f"Error {e.code}: {e.message}")
            if e.description:
                print(f"  {e.description}")
        except KeyboardInterrupt:
            print("\nUse 'exit' or 'quit' to exit interactive mode")
        except EOFError:
            # Handle Ctrl+D
            print("\nExiting interactive mode")
            break
        except GrblError as e:
            print(f"Error: {str(e)}")

    print("Interactive mode closed")
    return 1 if device.error is not None and device.error.kind is ErrorKind.PROTOCOL else 0
