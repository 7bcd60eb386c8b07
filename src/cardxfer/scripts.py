# filename : scripts.py
# created  : 10/19/2026


import logging
import sys
from pathlib import Path

import click

from cardxfer.core.smartcard.logging import PROTOCOL, TRACE

lg = logging.getLogger(__name__)


def _parse_aid(ctx, param, value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise click.BadParameter(f"not a hex string: '{value}'") from None


def _prompt_keep(result) -> bool:
    return click.confirm(
        f"Checksum not verified for {result.identity.filename}. Keep it anyway?",
        default=False,
    )


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw APDUs).")
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for the received file.",
)
@click.option("-r", "--reader", default=None, help="Use the first reader whose name contains this.")
@click.option(
    "--aid",
    default="F0010203040506",
    show_default=True,
    callback=_parse_aid,
    help="AID of the sending application (hex).",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=0.05,
    show_default=True,
    help="Pause between READ BINARY commands, in seconds.",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append a per-chunk MD5 line to this file.",
)
@click.option(
    "--simulate",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Receive this local file through the card emulator instead of a reader.",
)
@click.option(
    "--keep-on-mismatch/--discard-on-mismatch",
    "keep_on_mismatch",
    default=None,
    help="Answer the keep/discard question for unverified files (default: ask).",
)
def cardxfer(verbose, output_dir, reader, aid, delay, audit_log, simulate, keep_on_mismatch):
    """Receive a file from an NFC card over APDU."""

    logging.basicConfig(
        level=TRACE if verbose else PROTOCOL,
        format="%(levelname)-8s %(name)s: %(message)s",
    )

    from cardxfer.app.main import main
    from cardxfer.core.transfer import TransferSettings

    try:
        settings = TransferSettings(
            aid=aid,
            chunk_delay=delay,
            output_dir=output_dir,
            audit_log=audit_log,
            reader=reader,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if keep_on_mismatch is None:
        decide = _prompt_keep
    else:
        decide = lambda result: keep_on_mismatch  # noqa: E731

    sys.exit(main(settings, decide, simulate=simulate))
