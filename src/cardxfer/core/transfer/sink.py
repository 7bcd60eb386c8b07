"""Durable storage for received bytes.

Data goes to ``<name>.<ext>.temp`` while the transfer runs. The file is
flushed and fsynced on close; promotion to the final name is a separate
decision (see resolution.py).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from cardxfer.core.transfer.checksum import md5
from cardxfer.core.transfer.metadata import FileIdentity

lg = logging.getLogger(__name__)


class FileSink:
    """Temporary file that receives chunks in order."""

    def __init__(self, directory: Path, identity: FileIdentity) -> None:
        self.directory = Path(directory)
        self.identity = identity
        self.temp_path = self.directory / identity.temp_filename
        self.final_path: Path | None = None
        self._file = None
        self.written = 0

    def __enter__(self) -> FileSink:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    def open(self) -> None:
        """Create the temp file.

        An existing temp file is never truncated; ``name (1).ext.temp``,
        ``name (2).ext.temp``... are tried instead.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        n = 1
        while True:
            try:
                self._file = open(self.temp_path, "xb")
                break
            except FileExistsError:
                lg.warning("%s already exists, leaving it in place", self.temp_path)
                name = f"{self.identity.name} ({n}).{self.identity.extension}"
                self.temp_path = self.directory / f"{name}.temp"
                n += 1
        lg.debug("writing to %s", self.temp_path)

    def write(self, data: bytes) -> None:
        if self._file is None:
            raise RuntimeError("sink is not open")
        self._file.write(data)
        self.written += len(data)

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
        finally:
            self._file.close()
            self._file = None

    def digest(self) -> bytes:
        """MD5 of the bytes on disk, read back after close."""
        return md5(self.temp_path.read_bytes())

    def promote(self) -> Path:
        """Rename the temp file to its final name.

        An existing file is never overwritten; ``name (1).ext``,
        ``name (2).ext``... are tried instead.
        """
        if not self.closed:
            raise RuntimeError("sink must be closed before promotion")
        target = self.directory / self.identity.filename
        n = 1
        while target.exists():
            target = self.directory / f"{self.identity.name} ({n}).{self.identity.extension}"
            n += 1
        self.temp_path.rename(target)
        self.final_path = target
        lg.info("saved to %s", target)
        return target
