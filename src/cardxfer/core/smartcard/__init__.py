from cardxfer.core.smartcard.errors import MalformedResponse, StatusError, TransportError
from cardxfer.core.smartcard.logging import PROTOCOL, TRACE
from cardxfer.core.smartcard.types import APDU, SW_SUCCESS, Response

__all__ = [
    "APDU",
    "MalformedResponse",
    "PROTOCOL",
    "Response",
    "SW_SUCCESS",
    "StatusError",
    "TRACE",
    "TransportError",
]
