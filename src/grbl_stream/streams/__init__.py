from .dummy import DummyStream
from .streams import Stream
from .transport import GrblProtocol, TransportStream

__all__ = ["DummyStream", "Stream", "GrblProtocol", "TransportStream"]
