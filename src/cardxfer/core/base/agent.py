from __future__ import annotations

import logging
from typing import Any, Protocol

from cardxfer.core.smartcard import APDU, Response, TransportError

lg = logging.getLogger(__name__)


class CardLink(Protocol):
    """What the agent needs from a card: a PC/SC card or the emulator."""

    def list_readers(self) -> list[Any]: ...
    def connect(self, reader: Any) -> None: ...
    def disconnect(self) -> None: ...
    def get_atr(self) -> bytes: ...
    def transmit(self, command: bytes) -> bytes: ...


class Agent:
    """Agent that manages card connectivity and APDU transmission.

    Protocol-specific operations live in standalone protocol classes
    (ISO7816, FileTransferProtocol) that receive agent.transmit as a
    callable. Terminals construct the protocol objects they need.
    """

    def __init__(self, card: CardLink, reader: str | None = None) -> None:
        self._card = card
        self._reader = reader

    def connect(self) -> None:
        """Discover a reader with a card present and connect.

        When a reader name was given, only readers whose name contains it
        are tried.
        """
        available = self._card.list_readers()
        if self._reader:
            available = [r for r in available if self._reader.lower() in str(r).lower()]
        if not available:
            raise TransportError("no readers found")
        for reader in available:
            try:
                self._card.connect(reader)
                lg.info("connected to %s", reader)
                lg.debug("ATR: %s", self.get_atr().hex(" ").upper())
                return
            except TransportError:
                lg.debug("no card on %s", reader)
        raise TransportError("no card found on any reader")

    def disconnect(self) -> None:
        """Disconnect from the card."""
        self._card.disconnect()

    def get_atr(self) -> bytes:
        """Return the ATR of the connected card."""
        return self._card.get_atr()

    def transmit(self, apdu: APDU) -> Response:
        """Send an APDU and split the answer into payload and status word.

        Raises TransportError when the channel fails and MalformedResponse
        when the answer is shorter than a status word.
        """
        raw = self._card.transmit(apdu.to_bytes())
        return Response.from_bytes(raw)
