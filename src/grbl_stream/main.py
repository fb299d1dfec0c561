"""
grbl-stream CLI Tool

A command-line tool for talking to Grbl CNC controllers.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import serial

from grbl_stream.cmd.interactive import interactive_mode
from grbl_stream.cmd.settings import show_settings
from grbl_stream.cmd.status import format_status
from grbl_stream.device.conn import CONN_USB, CONN_WIFI, connect
from grbl_stream.device.grbl import GrblDevice
from grbl_stream.errors import CommandError, GrblError
from grbl_stream.streams.usb import BAUD_RATE, list_ports


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='grbl-stream CLI Tool',
        epilog="""A tool for talking to Grbl CNC controllers."""
    )

    # Global options (apply to all subcommands)
    parser.add_argument('--device', '-d', default=None,
                        help='Device address (serial port for USB, host[:port] for WiFi)')
    parser.add_argument('--usb', dest='connection', action='store_const', const=CONN_USB,
                        help='Force USB connection')
    parser.add_argument('--wifi', dest='connection', action='store_const', const=CONN_WIFI,
                        help='Force WiFi connection')
    parser.add_argument('--baudrate', type=int, default=BAUD_RATE,
                        help=f'Serial baud rate (default: {BAUD_RATE})')
    parser.add_argument('--timeout', type=float, default=15.0,
                        help='Seconds to wait for the controller before giving up (default: 15)')
    # Logging / Output options (Mutually Exclusive)
    log_level_group = parser.add_mutually_exclusive_group()
    log_level_group.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose DEBUG level logging')
    log_level_group.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress INFO level logging, show only WARNINGs and ERRORs')

    subparsers = parser.add_subparsers(dest='action', title='Actions',
                                     description='Choose an action to perform', required=True)

    subparsers.add_parser('status', help='Show the machine status report')

    parser_settings = subparsers.add_parser('settings', help='Show all $ settings')
    parser_settings.add_argument('--output', '-o', type=Path,
                       help='Save the raw $code=value lines to a file')

    subparsers.add_parser('help', help='Show the controller help line')

    parser_command = subparsers.add_parser('command', help='Execute a single command on the controller')
    parser_command.add_argument('device_command', help='The command string to send')

    subparsers.add_parser('home', help='Run the homing cycle ($H)')
    subparsers.add_parser('unlock', help='Kill the alarm lock ($X)')

    parser_move = subparsers.add_parser('move', help='Rapid move to an absolute position (mm)')
    parser_move.add_argument('--x', type=float)
    parser_move.add_argument('--y', type=float)
    parser_move.add_argument('--z', type=float)

    subparsers.add_parser('interactive', aliases=['i'], help='Enter interactive command mode')
    subparsers.add_parser('scan', help='List available serial ports and exit')

    return parser


async def run_action(device: GrblDevice, args: argparse.Namespace) -> int:
    """Runs one subcommand against a connected device and returns the exit code."""
    if args.action == 'status':
        print(format_status(await device.status()))

    elif args.action == 'settings':
        return await show_settings(device, args.output)

    elif args.action == 'help':
        print(await device.help())

    elif args.action == 'command':
        for line in await device.command(args.device_command):
            print(line)

    elif args.action == 'home':
        await device.run_homing_cycle()

    elif args.action == 'unlock':
        await device.kill_alarm_lock()

    elif args.action == 'move':
        await device.metric_coordinates()
        await device.absolute_positioning()
        await device.rapid_travel()
        await device.position(x=args.x, y=args.y, z=args.z)

    return 0


async def run(args: argparse.Namespace) -> int:
    log = logging.getLogger("main")

    device = await connect(args.device, args.connection, baudrate=args.baudrate)
    device.on('version', lambda version: log.info(f"Grbl version {version}"))
    device.on('command', lambda text: log.debug(f"> {text}"))
    device.on('message', lambda line: log.debug(f"< {line}"))

    try:
        if args.action in ('interactive', 'i'):
            return await interactive_mode(device)
        return await asyncio.wait_for(run_action(device, args), timeout=args.timeout)
    except asyncio.TimeoutError:
        log.error(f"No response from controller within {args.timeout}s")
        return 1
    except CommandError as e:
        log.error(f"Command failed: {e}")
        return 1
    finally:
        device.close()


def main() -> int:
    args = build_parser().parse_args()

    # Set up logging level based on flags
    log_level = logging.INFO # Default
    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    log = logging.getLogger("main")

    # Handle scan mode separately as it doesn't need a connection
    if args.action == 'scan':
        ports = list_ports()
        if not ports:
            log.info("No serial ports found")
        for p in ports:
            print(f"{p['port']}\t{p['description']}\t{p['hwid']}")
        return 0

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        log.warning("Operation cancelled by user")
        return 1
    except (ValueError, OSError, serial.SerialException) as e:
        log.error(f"Failed to connect to device: {e}")
        return 1
    except GrblError as e:
        log.error(f"Connection failed: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
