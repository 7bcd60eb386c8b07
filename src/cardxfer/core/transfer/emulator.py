"""In-process card serving a file the way the sending application does.

FileCard implements the same raw transmit contract as the pyscard Card,
so an Agent can drive it in place of a physical reader. It answers:

    A4  SELECT        4-byte big-endian size, or 6A82 with no file
    B0  READ BINARY   up to CHUNK_SIZE bytes from P1P2 (Le ignored)
    B1  GET CHECKSUM  16-byte MD5 of the file
    B2  GET METADATA  name + "\\n" + extension
"""

from __future__ import annotations

import logging
from pathlib import Path

from cardxfer.core.base.iso7816 import INS_READ_BINARY, INS_SELECT
from cardxfer.core.smartcard import TRACE, TransportError
from cardxfer.core.smartcard.logging import format_sw, log_hex
from cardxfer.core.transfer.checksum import md5
from cardxfer.core.transfer.protocol import CHUNK_SIZE, INS_GET_CHECKSUM, INS_GET_METADATA

lg = logging.getLogger(__name__)

SW_OK = b"\x90\x00"
SW_WRONG_PARAMETERS = b"\x6B\x00"
SW_NOT_ALLOWED = b"\x69\x86"
SW_FILE_NOT_FOUND = b"\x6A\x82"
SW_INS_NOT_SUPPORTED = b"\x6D\x00"
SW_TECHNICAL_PROBLEM = b"\x6F\x00"

EMULATOR_READER = "cardxfer emulator"
EMULATOR_ATR = bytes.fromhex("3B8080010101")


class FileCard:
    """Card emulator for one file."""

    def __init__(self, data: bytes | None, name: str = "", extension: str = "") -> None:
        self.data = data
        self.name = name
        self.extension = extension
        self.checksum = md5(data) if data else None
        self.connected = False

    @classmethod
    def from_path(cls, path: Path) -> FileCard:
        """Serve a local file; metadata comes from its name."""
        path = Path(path)
        return cls(path.read_bytes(), name=path.stem, extension=path.suffix.lstrip("."))

    # -- CardLink --

    @staticmethod
    def list_readers() -> list[str]:
        return [EMULATOR_READER]

    def connect(self, reader: str) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def get_atr(self) -> bytes:
        return EMULATOR_ATR

    def transmit(self, command: bytes) -> bytes:
        if not self.connected:
            raise TransportError("not connected to a card")
        log_hex(lg, ">> ", command)
        response = self.process(command)
        if len(response) > 2:
            log_hex(lg, "<< ", response[:-2])
        if len(response) >= 2:
            lg.log(TRACE, "<< %s", format_sw(response[-2], response[-1]))
        return response

    # -- card side --

    def process(self, command: bytes) -> bytes:
        if len(command) < 4:
            return SW_TECHNICAL_PROBLEM
        ins = command[1]
        if ins == INS_SELECT:
            return self._select()
        if ins == INS_READ_BINARY:
            return self._read_binary(command)
        if ins == INS_GET_CHECKSUM:
            return self._get_checksum()
        if ins == INS_GET_METADATA:
            return self._get_metadata()
        return SW_INS_NOT_SUPPORTED

    def _select(self) -> bytes:
        if not self.data:
            return SW_FILE_NOT_FOUND
        return len(self.data).to_bytes(4, "big") + SW_OK

    def _read_binary(self, command: bytes) -> bytes:
        if self.data is None:
            return SW_NOT_ALLOWED
        offset = (command[2] << 8) | command[3]
        if offset >= len(self.data):
            return SW_WRONG_PARAMETERS
        return self.data[offset : offset + CHUNK_SIZE] + SW_OK

    def _get_checksum(self) -> bytes:
        if self.checksum is None:
            return SW_TECHNICAL_PROBLEM
        return self.checksum + SW_OK

    def _get_metadata(self) -> bytes:
        return f"{self.name}\n{self.extension}".encode() + SW_OK
