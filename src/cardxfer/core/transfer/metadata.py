"""File identity parsed from the GET METADATA payload."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_NAME = "received_file"
DEFAULT_EXTENSION = "bin"

_RESERVED = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize(part: str) -> str:
    """Replace characters that are not allowed in a file name with '_'."""
    return _RESERVED.sub("_", part)


@dataclass(frozen=True)
class FileIdentity:
    name: str = DEFAULT_NAME
    extension: str = DEFAULT_EXTENSION

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.extension}"

    @property
    def temp_filename(self) -> str:
        return f"{self.filename}.temp"

    @classmethod
    def from_payload(cls, payload: bytes) -> FileIdentity:
        """Parse ``name\\nextension``; missing or empty parts get defaults."""
        text = payload.decode("utf-8", errors="replace")
        name, _, extension = text.partition("\n")
        name = name.strip()
        extension = extension.strip()
        # "." or ".." would leave the output directory
        if name in (".", ".."):
            name = ""
        return cls(
            name=sanitize(name) if name else DEFAULT_NAME,
            extension=sanitize(extension) if extension else DEFAULT_EXTENSION,
        )
