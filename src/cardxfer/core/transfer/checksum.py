"""MD5 checksum computation and comparison."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes

lg = logging.getLogger(__name__)

DIGEST_SIZE = 16

_WHITESPACE = re.compile(r"\s+")


def md5(data: bytes) -> bytes:
    """Compute the 16-byte MD5 digest of data."""
    h = hashes.Hash(hashes.MD5())
    h.update(data)
    return h.finalize()


def to_hex(digest: bytes) -> str:
    return digest.hex()


def digests_equal(a: bytes, b: bytes) -> bool:
    """Compare two raw digests: length first, then byte by byte."""
    if len(a) != len(b):
        return False
    return all(x == y for x, y in zip(a, b))


def verify(received_hex: str, calculated_hex: str) -> bool:
    """Compare two hex digests, ignoring case.

    When the strings differ, the comparison is retried with all
    whitespace removed from both (senders that group hex by spaces).
    """
    if len(received_hex) == len(calculated_hex) and received_hex.lower() == calculated_hex.lower():
        return True
    received = _WHITESPACE.sub("", received_hex)
    calculated = _WHITESPACE.sub("", calculated_hex)
    return len(received) == len(calculated) and received.lower() == calculated.lower()


@dataclass
class Verification:
    """Outcome of checking received data against the sender's digest."""

    received_hex: str
    calculated_hex: str
    written_hex: str | None
    matched: bool

    @property
    def write_path_ok(self) -> bool:
        """Whether the bytes on disk hash to the same value as the buffer."""
        return self.written_hex is None or self.written_hex == self.calculated_hex


def check(received: bytes, data: bytes, written: bytes | None = None) -> Verification:
    """Verify data against the digest reported by the sender.

    ``written`` is the digest of the bytes read back from the sink; it is
    reported alongside but does not change the outcome.
    """
    calculated = md5(data)
    received_hex = to_hex(received)
    calculated_hex = to_hex(calculated)
    matched = verify(received_hex, calculated_hex)
    if matched != digests_equal(received, calculated):
        lg.error(
            "digest comparisons disagree: received=%s calculated=%s",
            received_hex, calculated_hex,
        )
    verification = Verification(
        received_hex=received_hex,
        calculated_hex=calculated_hex,
        written_hex=to_hex(written) if written is not None else None,
        matched=matched,
    )
    if not verification.write_path_ok:
        lg.error(
            "written file digest %s differs from received data %s",
            verification.written_hex, calculated_hex,
        )
    return verification
