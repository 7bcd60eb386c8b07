"""Per-chunk audit trail.

One line per received chunk with its index, offset, length and MD5. The
log is diagnostic only: logging swallows handler errors, so a failing
audit file never affects the transfer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cardxfer.core.transfer.checksum import md5, to_hex

lg = logging.getLogger(__name__)

AUDIT_FORMAT = "%(asctime)s %(message)s"


class AuditLog:
    """Append-only chunk log, active between enter and exit."""

    def __init__(self, path: Path | None) -> None:
        self.path = Path(path) if path is not None else None
        self._logger = logging.getLogger("cardxfer.audit")
        self._logger.propagate = False
        self._logger.setLevel(logging.INFO)
        self._handler: logging.Handler | None = None

    def __enter__(self) -> AuditLog:
        if self.path is not None:
            try:
                self._handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
            except OSError as exc:
                lg.warning("audit log disabled, cannot open %s: %s", self.path, exc)
            else:
                self._handler.setFormatter(logging.Formatter(AUDIT_FORMAT))
                self._logger.addHandler(self._handler)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    def chunk(self, index: int, offset: int, data: bytes) -> None:
        if self._handler is None:
            return
        self._logger.info(
            "chunk=%d offset=%d len=%d md5=%s", index, offset, len(data), to_hex(md5(data))
        )
