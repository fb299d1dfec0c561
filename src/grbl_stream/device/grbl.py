import asyncio
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional

from ..codes.catalog import Catalog, load_catalog
from ..errors import CommandError, ConnectionClosedError, GrblError, ProtocolError
from ..events import EventEmitter
from ..protocol.boot import EVENT_VERSION, BootState, advance
from ..protocol.decoders import parse_help, parse_settings, parse_status
from ..protocol.framer import LineFramer
from ..protocol.models import MachineStatus, Setting
from ..streams.streams import Stream

COMMAND_TERMINATOR = b'\n'
OK_MARKER = "ok"
ERROR_PREFIX = "error:"


@dataclass
class _PendingCommand:
    text: str
    future: asyncio.Future
    lines: List[str] = field(default_factory=list)


def _format_coordinate(axis: str, value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    if value == 0:
        value = 0  # -0.0 is sent as 0.0
    # Ties round away from zero on the exact binary value
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{axis}{rounded}"


class GrblDevice:
    """
    Protocol engine for a single Grbl connection.

    Inbound bytes are handed to ``feed()`` by the transport; they are framed
    into lines, run through the boot state machine and published as events.
    ``command()`` writes one command at a time to the attached Stream and
    collects the lines that arrive until its ``ok`` or ``error:<code>``.
    Commands wait in FIFO order for the connection to finish booting and for
    the previous command to resolve. There is no timeout: a controller that
    never answers stalls every later command until ``destroy()`` is called.
    Cancelling a caller that is awaiting its response destroys the connection.
    """

    def __init__(self, stream: Optional[Stream] = None, catalog: Optional[Catalog] = None,
                 events: Optional[EventEmitter] = None):
        self.log = logging.getLogger("GrblDevice")
        self.stream: Optional[Stream] = stream
        self.catalog: Catalog = catalog if catalog is not None else load_catalog()
        self.events: EventEmitter = events if events is not None else EventEmitter()
        self.state: BootState = BootState.AWAITING_VERSION
        self.version: Optional[str] = None
        self.error: Optional[GrblError] = None

        self._framer = LineFramer()
        self._lock = asyncio.Lock()
        self._booted = asyncio.Event()
        self._pending: Optional[_PendingCommand] = None

    def attach(self, stream: Stream) -> None:
        """Sets the outbound stream once the transport is connected."""
        self.stream = stream
        self.log.debug(f"Stream attached: {stream}")

    def on(self, event: str, callback: Callable[..., None]) -> "GrblDevice":
        self.events.on(event, callback)
        return self

    @property
    def closed(self) -> bool:
        return self.error is not None

    # --- Inbound ---

    def feed(self, data: bytes) -> None:
        """Consumes a chunk of raw bytes received from the controller."""
        if self.closed:
            self.log.debug(f"Ignoring {len(data)} bytes received after close")
            return

        for line in self._framer.feed(data):
            self._parse(line)
            if self.closed:
                break

    def _parse(self, line: str) -> None:
        previous = self.state
        try:
            self.state, event = advance(previous, line)
        except ProtocolError as e:
            self.destroy(e)
            return

        if event.kind == EVENT_VERSION:
            self.version = event.payload
            self.log.info(f"Controller version: {self.version}")
            self.events.emit('version', self.version)
            return

        self._on_message(event.payload)

        if previous is BootState.AWAITING_UNLOCK_NOTICE:
            self.log.debug("Boot sequence complete")
            self._booted.set()

    def _on_message(self, line: str) -> None:
        self.log.debug(f"Recv: {line!r}")
        self.events.emit('message', line)

        pending = self._pending
        if pending is None or pending.future.done():
            return

        if line == OK_MARKER:
            pending.future.set_result(pending.lines)
        elif line.startswith(ERROR_PREFIX):
            code = line[len(ERROR_PREFIX):]
            self.log.warning(f"Command {pending.text!r} rejected with error code {code}")
            pending.future.set_exception(CommandError.from_code(code, self.catalog))
        else:
            pending.lines.append(line)

    # --- Outbound ---

    async def command(self, text: str) -> List[str]:
        """
        Sends one command line and waits for its response.

        Returns:
            The lines received before ``ok``, in arrival order.

        Raises:
            CommandError: The controller answered ``error:<code>``.
            GrblError: The connection was destroyed before or while waiting.
        """
        async with self._lock:
            await self._booted.wait()
            self._check_open()

            future = asyncio.get_running_loop().create_future()
            self._pending = _PendingCommand(text, future)
            try:
                self.log.debug(f"Sending: {text!r}")
                self.stream.send(text.encode('utf-8') + COMMAND_TERMINATOR)
                self.events.emit('command', text)
                return await future
            except asyncio.CancelledError:
                # The controller still owes this command a terminal marker
                self.destroy(ConnectionClosedError(f"Command {text!r} cancelled while awaiting its response"))
                raise
            finally:
                self._pending = None

    def _check_open(self) -> None:
        if self.error is not None:
            raise self.error
        if self.stream is None:
            raise ConnectionClosedError("No stream attached")

    # --- Teardown ---

    def destroy(self, error: Optional[GrblError] = None) -> None:
        """
        Tears the connection down. The pending command and every waiting or
        later caller fail with ``error``.
        """
        if self.error is not None:
            return

        if error is None:
            error = ConnectionClosedError("Connection closed")
            self.log.debug("Closing connection")
        else:
            self.log.error(f"Connection destroyed: {error}")

        self.error = error
        self._framer.reset()

        pending = self._pending
        if pending is not None and not pending.future.done():
            pending.future.set_exception(error)
        # Wake commands still waiting for the boot sequence so they see the error
        self._booted.set()

        self.events.emit('error', error)

        if self.stream:
            try:
                self.stream.close()
            except OSError as e:
                self.log.error(f"Error closing stream: {e}")

    def close(self) -> None:
        self.destroy()

    # --- Queries ---

    async def status(self) -> MachineStatus:
        # <Idle|MPos:0.000,0.000,0.000|FS:0,0|WCO:0.000,0.000,0.000>
        return parse_status(await self.command('?'))

    async def help(self) -> str:
        return parse_help(await self.command('$'))

    async def settings(self) -> List[Setting]:
        return parse_settings(await self.command('$$'), self.catalog)

    # --- Shortcuts ---

    async def run_homing_cycle(self) -> None:
        await self.command('$H')

    async def kill_alarm_lock(self) -> None:
        await self.command('$X')

    async def rapid_travel(self) -> None:
        await self.command('G00')

    async def imperial_coordinates(self) -> None:
        await self.command('G20')

    async def metric_coordinates(self) -> None:
        await self.command('G21')

    async def absolute_positioning(self) -> None:
        await self.command('G90')

    async def incremental_positioning(self) -> None:
        await self.command('G91')

    async def position(self, x: Optional[float] = None, y: Optional[float] = None,
                       z: Optional[float] = None) -> None:
        """Moves to the given axes. Omitted axes are left out of the command."""
        coordinates = [
            _format_coordinate('X', x),
            _format_coordinate('Y', y),
            _format_coordinate('Z', z),
        ]
        await self.command(' '.join(c for c in coordinates if c))
