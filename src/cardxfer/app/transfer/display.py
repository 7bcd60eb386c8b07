"""Human-readable transfer report."""

from __future__ import annotations

from cardxfer.core.transfer import Resolution, TransferResult, TransferState

MISMATCH_CAUSES = (
    "a chunk was corrupted on the NFC link",
    "the card returned data for the wrong offset",
    "the file changed on the sender after the transfer started",
    "the sender computed the checksum over different data",
)


def _percent(received: int, total: int) -> int:
    return received * 100 // total if total else 100


def format_result(result: TransferResult) -> str:
    lines = []
    if result.reason is not None:
        line = f"  Failed:      {result.reason.value}"
        if result.sw is not None:
            line += f" (SW={result.sw >> 8:02X} {result.sw & 0xFF:02X})"
        lines.append(line)
        if result.detail:
            lines.append(f"  Detail:      {result.detail}")

    if result.sink is None:
        if result.state is TransferState.DONE:
            lines.append("  File:        empty, nothing received")
        return "\n".join(lines)

    lines.append(f"  File:        {result.identity.filename}")
    lines.append(
        f"  Received:    {result.total_received} of {result.file_size} bytes "
        f"({_percent(result.total_received, result.file_size)}%)"
    )
    lines.append(f"  Complete:    {'yes' if result.transfer_complete else 'no'}")

    v = result.verification
    if v is None:
        lines.append("  Checksum:    could not retrieve checksum, not verified")
    elif v.matched:
        lines.append(f"  Checksum:    verified ({v.calculated_hex})")
    else:
        lines.append("  Checksum:    MISMATCH")
        lines.append(f"    received:   {v.received_hex}")
        lines.append(f"    calculated: {v.calculated_hex}")
        lines.append("    possible causes:")
        for cause in MISMATCH_CAUSES:
            lines.append(f"      - {cause}")
    if v is not None and not v.write_path_ok:
        lines.append(f"  Written:     {v.written_hex} (differs from received data)")

    lines.append(f"  Temp file:   {result.sink.temp_path}")
    return "\n".join(lines)


def format_resolution(result: TransferResult) -> str:
    if result.resolution is Resolution.KEPT:
        return f"saved to {result.sink.final_path}"
    if result.resolution in (Resolution.DISCARDED, Resolution.PARTIAL):
        return f"not saved, data left in {result.sink.temp_path}"
    return "nothing saved"
