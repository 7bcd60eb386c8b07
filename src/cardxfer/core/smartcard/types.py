from __future__ import annotations

from dataclasses import dataclass

from cardxfer.core.smartcard.errors import MalformedResponse

SW_SUCCESS = 0x9000


@dataclass(frozen=True)
class APDU:
    """ISO 7816 command APDU."""

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""
    le: int | None = None

    def to_bytes(self) -> bytes:
        """Encode as a short APDU (Lc and Le on one byte each)."""
        if len(self.data) > 255:
            raise ValueError(f"command data too long for a short APDU: {len(self.data)}")
        if self.le is not None and not 0 <= self.le <= 256:
            raise ValueError(f"Le out of range for a short APDU: {self.le}")
        buf = bytearray([self.cla, self.ins, self.p1, self.p2])
        if self.data:
            buf.append(len(self.data))
            buf.extend(self.data)
        if self.le is not None:
            # Le=256 is encoded as 00
            buf.append(self.le & 0xFF)
        return bytes(buf)

    def __repr__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass
class Response:
    """ISO 7816 response APDU."""

    data: bytes
    sw1: int
    sw2: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> Response:
        """Split a raw response into payload and status word."""
        if len(raw) < 2:
            raise MalformedResponse(bytes(raw))
        return cls(data=bytes(raw[:-2]), sw1=raw[-2], sw2=raw[-1])

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2

    @property
    def success(self) -> bool:
        return self.sw == SW_SUCCESS

    def __repr__(self) -> str:
        sw = f"SW={self.sw:04X}"
        if self.data:
            return f"{self.data.hex(' ').upper()} {sw}"
        return sw
