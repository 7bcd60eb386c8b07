from __future__ import annotations


class TransportError(Exception):
    """The channel to the card failed; no status word is available."""


class MalformedResponse(Exception):
    """A response too short to carry a status word."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"response too short ({len(raw)} bytes): {raw.hex(' ').upper()}")
        self.raw = raw


class StatusError(Exception):
    """The card answered with a status word other than 9000."""

    def __init__(self, label: str, sw1: int, sw2: int) -> None:
        super().__init__(f"{label} failed: SW={sw1:02X}{sw2:02X}")
        self.label = label
        self.sw1 = sw1
        self.sw2 = sw2

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2
