from .base import Transport, TransportError
from .urllib_transport import UrllibTransport

__all__ = ["Transport", "TransportError", "UrllibTransport"]
