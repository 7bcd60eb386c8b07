"""Vendor commands of the file transfer application.

The sender answers two proprietary instructions next to SELECT and READ
BINARY: GET CHECKSUM (B1) returns the MD5 of the whole file and GET
METADATA (B2) returns ``name\\nextension``. Both are sent with Le=00 so
the card returns everything it has.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from cardxfer.core.smartcard import APDU, PROTOCOL, Response
from cardxfer.core.smartcard.logging import format_sw

lg = logging.getLogger(__name__)

INS_GET_CHECKSUM = 0xB1
INS_GET_METADATA = 0xB2

TRANSFER_AID = bytes.fromhex("F0010203040506")
CHUNK_SIZE = 230


def build_metadata_request() -> APDU:
    """GET METADATA (00 B2 00 00, Le=00)."""
    return APDU(cla=0x00, ins=INS_GET_METADATA, p1=0x00, p2=0x00, le=0x00)


def build_checksum_request() -> APDU:
    """GET CHECKSUM (00 B1 00 00, Le=00)."""
    return APDU(cla=0x00, ins=INS_GET_CHECKSUM, p1=0x00, p2=0x00, le=0x00)


class FileTransferProtocol:
    """Proprietary operations of the file transfer application."""

    def __init__(self, transmit: Callable[[APDU], Response]) -> None:
        self._transmit = transmit

    def _send(self, label: str, apdu: APDU) -> Response:
        resp = self._transmit(apdu)
        lg.log(PROTOCOL, "%s %s", label, format_sw(resp.sw1, resp.sw2))
        return resp

    # -- commands --

    def send_get_metadata(self) -> Response:
        return self._send("GET METADATA", build_metadata_request())

    def send_get_checksum(self) -> Response:
        return self._send("GET CHECKSUM", build_checksum_request())
