from cardxfer.core.transfer.checksum import Verification, md5, verify
from cardxfer.core.transfer.config import TransferSettings
from cardxfer.core.transfer.emulator import FileCard
from cardxfer.core.transfer.messages import (
    GetChecksumMessage,
    GetChecksumResult,
    GetMetadataMessage,
    GetMetadataResult,
    ReadChunkMessage,
    ReadChunkResult,
    SelectFileMessage,
    SelectFileResult,
)
from cardxfer.core.transfer.metadata import FileIdentity
from cardxfer.core.transfer.protocol import CHUNK_SIZE, TRANSFER_AID, FileTransferProtocol
from cardxfer.core.transfer.receiver import (
    FailureReason,
    FileReceiver,
    TransferResult,
    TransferState,
)
from cardxfer.core.transfer.resolution import Resolution, resolve
from cardxfer.core.transfer.sink import FileSink
from cardxfer.core.transfer.terminal import TransferTerminal

__all__ = [
    "CHUNK_SIZE",
    "FailureReason",
    "FileCard",
    "FileIdentity",
    "FileReceiver",
    "FileSink",
    "FileTransferProtocol",
    "GetChecksumMessage",
    "GetChecksumResult",
    "GetMetadataMessage",
    "GetMetadataResult",
    "ReadChunkMessage",
    "ReadChunkResult",
    "Resolution",
    "SelectFileMessage",
    "SelectFileResult",
    "TRANSFER_AID",
    "TransferResult",
    "TransferSettings",
    "TransferState",
    "TransferTerminal",
    "Verification",
    "md5",
    "resolve",
]
