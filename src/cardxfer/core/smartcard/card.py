from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartcard.CardConnection import CardConnection
from smartcard.Exceptions import CardConnectionException, NoCardException, SmartcardException
from smartcard.System import readers

from cardxfer.core.smartcard.errors import TransportError
from cardxfer.core.smartcard.observer import LoggingCardObserver

if TYPE_CHECKING:
    from smartcard.reader.Reader import Reader

lg = logging.getLogger(__name__)


class Card:
    """Wrapper around pyscard: raw bytes in, raw bytes out."""

    def __init__(self) -> None:
        self._connection: CardConnection | None = None
        self._observer = LoggingCardObserver()

    @staticmethod
    def list_readers() -> list[Reader]:
        try:
            return readers()
        except SmartcardException as exc:
            raise TransportError(f"cannot list readers: {exc}") from exc

    def connect(self, reader: Reader) -> None:
        connection = reader.createConnection()
        connection.addObserver(self._observer)
        try:
            connection.connect()
        except (CardConnectionException, NoCardException) as exc:
            connection.deleteObserver(self._observer)
            raise TransportError(f"cannot connect to {reader}: {exc}") from exc
        self._connection = connection

    def disconnect(self) -> None:
        if self._connection is not None:
            try:
                self._connection.disconnect()
            except CardConnectionException as exc:
                lg.warning("disconnect failed: %s", exc)
            self._connection.deleteObserver(self._observer)
            self._connection = None

    def get_atr(self) -> bytes:
        if self._connection is None:
            raise TransportError("not connected to a card")
        return bytes(self._connection.getATR())

    def transmit(self, command: bytes) -> bytes:
        """Send one command and return the full response, status word included."""
        if self._connection is None:
            raise TransportError("not connected to a card")
        try:
            data, sw1, sw2 = self._connection.transmit(list(command))
        except CardConnectionException as exc:
            raise TransportError(str(exc)) from exc
        return bytes(data) + bytes([sw1, sw2])
