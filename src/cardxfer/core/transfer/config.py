from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cardxfer.core.transfer.protocol import TRANSFER_AID

CHUNK_DELAY = 0.05


@dataclass
class TransferSettings:
    """Settings for one transfer; the CLI fills these from its options."""

    aid: bytes = TRANSFER_AID
    chunk_delay: float = CHUNK_DELAY
    output_dir: Path = field(default_factory=Path.cwd)
    audit_log: Path | None = None
    reader: str | None = None

    def __post_init__(self) -> None:
        if not 1 <= len(self.aid) <= 16:
            raise ValueError(f"AID must be 1 to 16 bytes, got {len(self.aid)}")
        if self.chunk_delay < 0:
            raise ValueError("chunk delay cannot be negative")
        self.output_dir = Path(self.output_dir)
        if self.audit_log is not None:
            self.audit_log = Path(self.audit_log)
