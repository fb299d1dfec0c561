import logging
from typing import List

DELIMITER = b'\r\n'


class LineFramer:
    """
    Splits an unbounded, chunked byte stream into CR LF terminated lines.

    Bytes after the last delimiter stay buffered until the next chunk. The
    buffer has no size limit: a peer that never sends a delimiter grows it
    without bound.
    """

    def __init__(self, delimiter: bytes = DELIMITER):
        self.log = logging.getLogger("LineFramer")
        self.delimiter = delimiter
        self._buffer = b''

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet part of a complete line."""
        return len(self._buffer)

    def feed(self, chunk: bytes) -> List[str]:
        """Appends a chunk and returns every complete, non-empty line it finishes."""
        buffer = self._buffer + chunk
        lines = []

        while True:
            position = buffer.find(self.delimiter)
            if position == -1:
                break
            line = buffer[:position]
            buffer = buffer[position + len(self.delimiter):]
            # Consecutive delimiters carry no meaning
            if line:
                lines.append(line.decode('utf-8', errors='replace'))

        self._buffer = buffer
        return lines

    def reset(self) -> None:
        if self._buffer:
            self.log.debug(f"Discarding {len(self._buffer)} buffered bytes")
        self._buffer = b''
