"""File receive state machine.

IDLE -> SELECTED -> METADATA_KNOWN -> RECEIVING -> VERIFYING -> DONE | FAILED

SELECT failures end the transfer at once. Metadata and checksum are
best effort. A failed READ BINARY stops the loop without retry; the
bytes already received stay on disk and the checksum step still runs.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from cardxfer.core.smartcard import PROTOCOL, TRACE, MalformedResponse, StatusError, TransportError
from cardxfer.core.transfer.audit import AuditLog
from cardxfer.core.transfer.checksum import Verification, check, md5, to_hex
from cardxfer.core.transfer.config import TransferSettings
from cardxfer.core.transfer.messages import (
    GetChecksumMessage,
    GetMetadataMessage,
    ReadChunkMessage,
    SelectFileMessage,
)
from cardxfer.core.transfer.metadata import FileIdentity
from cardxfer.core.transfer.protocol import CHUNK_SIZE
from cardxfer.core.transfer.resolution import Resolution
from cardxfer.core.transfer.sink import FileSink
from cardxfer.core.transfer.terminal import TransferTerminal

lg = logging.getLogger(__name__)

SIZE_FIELD_LEN = 4
MAX_OFFSET = 0xFFFF

_CARD_ERRORS = (TransportError, MalformedResponse, StatusError)


class TransferState(enum.Enum):
    IDLE = "idle"
    SELECTED = "selected"
    METADATA_KNOWN = "metadata known"
    RECEIVING = "receiving"
    VERIFYING = "verifying"
    DONE = "done"
    FAILED = "failed"


class FailureReason(enum.Enum):
    SELECT_REJECTED = "SELECT rejected"
    MISSING_SIZE_FIELD = "SELECT response has no file size"
    OFFSET_OVERFLOW = "offset does not fit in P1/P2"
    READ_TRANSPORT_ERROR = "transport error during READ BINARY"
    MALFORMED_RESPONSE = "malformed READ BINARY response"
    READ_REJECTED = "READ BINARY rejected"
    ZERO_PROGRESS = "READ BINARY returned no data"


class _Abort(Exception):
    def __init__(self, reason: FailureReason, detail: str = "", sw: int | None = None) -> None:
        super().__init__(reason.value)
        self.reason = reason
        self.detail = detail
        self.sw = sw


@dataclass
class TransferSession:
    """Bookkeeping for one transfer, owned by a single FileReceiver."""

    file_size: int = 0
    total_received: int = 0
    buffer: bytearray = field(default_factory=bytearray)
    chunk_size: int = CHUNK_SIZE
    chunks: int = 0

    @property
    def remaining(self) -> int:
        return self.file_size - self.total_received


@dataclass
class TransferResult:
    state: TransferState
    file_size: int = 0
    total_received: int = 0
    identity: FileIdentity | None = None
    reason: FailureReason | None = None
    sw: int | None = None
    detail: str = ""
    sink: FileSink | None = None
    verification: Verification | None = None
    transfer_complete: bool = False
    resolution: Resolution | None = None

    @property
    def checksum_verified(self) -> bool:
        return self.verification is not None and self.verification.matched

    @property
    def temp_path(self) -> Path | None:
        return self.sink.temp_path if self.sink is not None else None


class FileReceiver:
    """Drives one file transfer through a TransferTerminal."""

    def __init__(
        self,
        terminal: TransferTerminal,
        settings: TransferSettings | None = None,
        sink_factory: Callable[[FileIdentity], FileSink] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._terminal = terminal
        self._settings = settings or TransferSettings()
        self._sink_factory = sink_factory or (
            lambda identity: FileSink(self._settings.output_dir, identity)
        )
        self._sleep = sleep
        self.state = TransferState.IDLE
        self.session: TransferSession | None = None

    def _enter(self, state: TransferState) -> None:
        lg.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def receive(self) -> TransferResult:
        """Run the whole transfer and return its outcome."""
        self.state = TransferState.IDLE
        session = TransferSession()
        self.session = session

        try:
            self._select(session)
        except _Abort as abort:
            self._enter(TransferState.FAILED)
            lg.error("%s %s", abort.reason.value, _describe(abort))
            return TransferResult(
                state=TransferState.FAILED, file_size=session.file_size,
                reason=abort.reason, sw=abort.sw, detail=abort.detail,
            )
        self._enter(TransferState.SELECTED)

        if session.file_size == 0:
            lg.info("sender has an empty file, nothing to receive")
            self._enter(TransferState.DONE)
            return TransferResult(state=TransferState.DONE, transfer_complete=True)

        identity = self._read_metadata()
        self._enter(TransferState.METADATA_KNOWN)

        abort: _Abort | None = None
        sink = self._sink_factory(identity)
        with sink, AuditLog(self._settings.audit_log) as audit:
            self._enter(TransferState.RECEIVING)
            try:
                self._receive_chunks(session, sink, audit)
            except _Abort as exc:
                abort = exc
                lg.error(
                    "%s %s: %d of %d bytes received",
                    exc.reason.value, _describe(exc),
                    session.total_received, session.file_size,
                )

        self._enter(TransferState.VERIFYING)
        verification = self._verify(session, sink)
        # the buffer is not needed past verification
        session.buffer = bytearray()

        result = TransferResult(
            state=TransferState.DONE,
            file_size=session.file_size,
            total_received=session.total_received,
            identity=identity,
            sink=sink,
            verification=verification,
            transfer_complete=session.total_received == session.file_size,
        )
        if abort is not None:
            result.state = TransferState.FAILED
            result.reason = abort.reason
            result.sw = abort.sw
            result.detail = abort.detail
        self._enter(result.state)
        return result

    # -- steps --

    def _select(self, session: TransferSession) -> None:
        try:
            result = self._terminal.send(SelectFileMessage(aid=self._settings.aid))
            _require_success("SELECT", result.sw, result.success)
        except (TransportError, MalformedResponse) as exc:
            raise _Abort(FailureReason.SELECT_REJECTED, str(exc)) from exc
        except StatusError as exc:
            raise _Abort(FailureReason.SELECT_REJECTED, sw=exc.sw) from exc
        if len(result.data) < SIZE_FIELD_LEN:
            raise _Abort(
                FailureReason.MISSING_SIZE_FIELD,
                f"payload is {len(result.data)} bytes",
            )
        file_size = int.from_bytes(result.data[:SIZE_FIELD_LEN], "big")
        # offset of the last READ BINARY when every chunk comes back full
        if (file_size - 1) // session.chunk_size * session.chunk_size > MAX_OFFSET:
            raise _Abort(
                FailureReason.OFFSET_OVERFLOW,
                f"file of {file_size} bytes is beyond 16-bit READ BINARY addressing",
            )
        session.file_size = file_size
        session.buffer = bytearray(file_size)
        lg.log(PROTOCOL, "file size: %d bytes", file_size)

    def _read_metadata(self) -> FileIdentity:
        try:
            result = self._terminal.send(GetMetadataMessage())
            _require_success("GET METADATA", result.sw, result.success)
        except _CARD_ERRORS as exc:
            lg.warning("metadata unavailable (%s), using default name", exc)
            return FileIdentity()
        identity = FileIdentity.from_payload(result.data)
        lg.info("file name: %s", identity.filename)
        return identity

    def _receive_chunks(
        self, session: TransferSession, sink: FileSink, audit: AuditLog,
    ) -> None:
        while session.total_received < session.file_size:
            offset = session.total_received
            remaining = session.remaining
            if offset > MAX_OFFSET:
                raise _Abort(FailureReason.OFFSET_OVERFLOW, f"offset {offset}")
            length = min(session.chunk_size, remaining)

            try:
                result = self._terminal.send(ReadChunkMessage(offset=offset, length=length))
                _require_success("READ BINARY", result.sw, result.success)
            except TransportError as exc:
                raise _Abort(FailureReason.READ_TRANSPORT_ERROR, str(exc)) from exc
            except MalformedResponse as exc:
                raise _Abort(FailureReason.MALFORMED_RESPONSE, str(exc)) from exc
            except StatusError as exc:
                raise _Abort(FailureReason.READ_REJECTED, f"offset {offset}", sw=exc.sw) from exc
            if not result.data:
                raise _Abort(FailureReason.ZERO_PROGRESS, f"offset {offset}")

            if len(result.data) > remaining:
                lg.warning(
                    "card returned %d bytes with %d remaining, extra bytes dropped",
                    len(result.data), remaining,
                )
            chunk = result.data[:remaining]
            session.buffer[offset : offset + len(chunk)] = chunk
            sink.write(chunk)
            session.total_received += len(chunk)
            session.chunks += 1
            if lg.isEnabledFor(TRACE):
                lg.log(
                    TRACE, "chunk=%d offset=%d len=%d md5=%s",
                    session.chunks, offset, len(chunk), to_hex(md5(chunk)),
                )
            audit.chunk(session.chunks, offset, chunk)
            lg.info(
                "received %d of %d bytes (%d%%)",
                session.total_received, session.file_size,
                session.total_received * 100 // session.file_size,
            )

            if session.total_received < session.file_size and self._settings.chunk_delay:
                self._sleep(self._settings.chunk_delay)

    def _verify(self, session: TransferSession, sink: FileSink) -> Verification | None:
        try:
            result = self._terminal.send(GetChecksumMessage())
            _require_success("GET CHECKSUM", result.sw, result.success)
        except _CARD_ERRORS as exc:
            lg.warning("could not retrieve checksum: %s", exc)
            return None
        if not result.digest:
            lg.warning("could not retrieve checksum: empty answer")
            return None

        written = None
        try:
            written = sink.digest()
        except OSError as exc:
            lg.warning("cannot read back %s: %s", sink.temp_path, exc)

        verification = check(
            result.digest, bytes(session.buffer[: session.total_received]), written,
        )
        if verification.matched:
            lg.info("checksum verified: %s", verification.calculated_hex)
        else:
            lg.warning(
                "checksum mismatch: received %s, calculated %s",
                verification.received_hex, verification.calculated_hex,
            )
        return verification


def _require_success(label: str, sw: int, success: bool) -> None:
    if not success:
        raise StatusError(label, sw >> 8, sw & 0xFF)


def _describe(abort: _Abort) -> str:
    parts = []
    if abort.sw is not None:
        parts.append(f"SW={abort.sw:04X}")
    if abort.detail:
        parts.append(abort.detail)
    return "(" + ", ".join(parts) + ")" if parts else ""
