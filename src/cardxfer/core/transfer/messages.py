"""File transfer messages and results.

Each card operation has a Message/Result pair. Results keep the raw
status word so a failure can be reported with the bytes the card sent.
"""

from __future__ import annotations

from dataclasses import dataclass

from cardxfer.core.base import Message, Result
from cardxfer.core.transfer.protocol import TRANSFER_AID


@dataclass
class SelectFileMessage(Message):
    """SELECT the transfer application; the answer carries the file size."""

    aid: bytes = TRANSFER_AID


@dataclass
class SelectFileResult(Result):
    data: bytes
    sw: int
    success: bool


@dataclass
class GetMetadataMessage(Message):
    """Request the file name and extension."""


@dataclass
class GetMetadataResult(Result):
    data: bytes
    sw: int
    success: bool


@dataclass
class ReadChunkMessage(Message):
    """READ BINARY one chunk at the given offset."""

    offset: int
    length: int


@dataclass
class ReadChunkResult(Result):
    data: bytes
    sw: int
    success: bool


@dataclass
class GetChecksumMessage(Message):
    """Request the sender's MD5 of the whole file."""


@dataclass
class GetChecksumResult(Result):
    digest: bytes
    sw: int
    success: bool
