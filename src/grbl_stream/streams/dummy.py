import logging
from typing import List, Union

from .streams import Stream

class DummyStream(Stream):
    """In-memory Stream that keeps every chunk a GrblDevice writes."""

    def __init__(self, address: str = "dummy"):
        self.log = logging.getLogger("DummyStream")
        self.address = address
        self.is_open = True
        self.sent_data: List[bytes] = []

    def send(self, data: bytes) -> None:
        if not self.is_open:
            raise IOError(f"Write to closed stream {self.address}")
        self.log.debug(f"{self.address} > {data!r}")
        self.sent_data.append(data)

    def close(self) -> None:
        self.is_open = False

    def get_sent_data(self, decode: bool = True) -> List[Union[str, bytes]]:
        """Written chunks, decoded as UTF-8 unless ``decode`` is False."""
        if decode:
            return [d.decode('utf-8') for d in self.sent_data]
        return list(self.sent_data)

    def clear_sent_data(self) -> None:
        self.sent_data.clear()
