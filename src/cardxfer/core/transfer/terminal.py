from __future__ import annotations

from cardxfer.core.base import Agent, ISO7816, Terminal
from cardxfer.core.base.terminal import handles
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
from cardxfer.core.transfer.protocol import FileTransferProtocol


class TransferTerminal(Terminal):
    """Terminal for the file transfer application.

    Handlers translate messages into one APDU each. TransportError and
    MalformedResponse propagate to the caller; status words are returned
    in the result.
    """

    def __init__(self, agent: Agent) -> None:
        super().__init__(agent)
        self._iso = ISO7816(agent.transmit)
        self._proto = FileTransferProtocol(agent.transmit)

    @handles(SelectFileMessage)
    def _select(self, message: SelectFileMessage) -> SelectFileResult:
        resp = self._iso.send_select(message.aid)
        return SelectFileResult(data=resp.data, sw=resp.sw, success=resp.success)

    @handles(GetMetadataMessage)
    def _get_metadata(self, message: GetMetadataMessage) -> GetMetadataResult:
        resp = self._proto.send_get_metadata()
        return GetMetadataResult(data=resp.data, sw=resp.sw, success=resp.success)

    @handles(ReadChunkMessage)
    def _read_chunk(self, message: ReadChunkMessage) -> ReadChunkResult:
        resp = self._iso.send_read_binary(message.offset, message.length)
        return ReadChunkResult(data=resp.data, sw=resp.sw, success=resp.success)

    @handles(GetChecksumMessage)
    def _get_checksum(self, message: GetChecksumMessage) -> GetChecksumResult:
        resp = self._proto.send_get_checksum()
        return GetChecksumResult(digest=resp.data, sw=resp.sw, success=resp.success)
