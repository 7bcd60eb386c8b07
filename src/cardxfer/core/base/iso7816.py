from __future__ import annotations

import logging
from collections.abc import Callable

from cardxfer.core.smartcard import APDU, PROTOCOL, Response
from cardxfer.core.smartcard.logging import format_sw

lg = logging.getLogger(__name__)

INS_SELECT = 0xA4
INS_READ_BINARY = 0xB0

SELECT_BY_NAME = 0x04
FIRST_OCCURRENCE = 0x00


def build_select(aid: bytes) -> APDU:
    """SELECT by name, first occurrence (00 A4 04 00 Lc AID)."""
    return APDU(cla=0x00, ins=INS_SELECT, p1=SELECT_BY_NAME, p2=FIRST_OCCURRENCE, data=aid)


def build_read_binary(offset: int, length: int) -> APDU:
    """READ BINARY (00 B0), offset big-endian in P1/P2, Le=length."""
    if not 0 <= offset <= 0xFFFF:
        raise ValueError(f"offset out of range: {offset}")
    if not 1 <= length <= 256:
        raise ValueError(f"Le out of range: {length}")
    return APDU(
        cla=0x00, ins=INS_READ_BINARY,
        p1=(offset >> 8) & 0xFF, p2=offset & 0xFF, le=length,
    )


class ISO7816:
    """ISO 7816-4 protocol operations."""

    def __init__(self, transmit: Callable[[APDU], Response]) -> None:
        self._transmit = transmit

    def _send(self, label: str, apdu: APDU) -> Response:
        resp = self._transmit(apdu)
        lg.log(PROTOCOL, "%s %s", label, format_sw(resp.sw1, resp.sw2))
        return resp

    # -- commands --

    def send_select(self, aid: bytes) -> Response:
        return self._send(f"SELECT {aid.hex().upper()}", build_select(aid))

    def send_read_binary(self, offset: int, length: int) -> Response:
        label = f"READ BINARY offset={offset:04X} le={length:02X}"
        return self._send(label, build_read_binary(offset, length))
