"""Transfer session orchestrator.

Constructs the full stack (Card -> Agent -> TransferTerminal ->
FileReceiver), connects, receives one file, disconnects, reports and
applies the keep/discard decision.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from cardxfer.app.transfer.display import format_resolution, format_result
from cardxfer.core.base import Agent
from cardxfer.core.smartcard import TransportError
from cardxfer.core.transfer import (
    FileCard,
    FileReceiver,
    TransferResult,
    TransferSettings,
    TransferTerminal,
    resolve,
)

lg = logging.getLogger(__name__)


def _open_card(simulate: Path | None):
    if simulate is not None:
        lg.info("serving %s from the card emulator", simulate)
        return FileCard.from_path(simulate)
    # pyscard is only needed for a physical reader
    from cardxfer.core.smartcard.card import Card
    return Card()


def session(
    settings: TransferSettings,
    decide: Callable[[TransferResult], bool],
    simulate: Path | None = None,
) -> TransferResult | None:
    """Receive one file. Returns None when no card could be reached."""
    card = _open_card(simulate)
    agent = Agent(card, reader=settings.reader)
    terminal = TransferTerminal(agent)
    receiver = FileReceiver(terminal, settings)

    result = None
    try:
        with terminal:
            result = receiver.receive()
    except (TransportError, OSError) as exc:
        lg.error("transfer aborted: %s", exc)

    if result is None:
        return None
    lg.info("transfer %s:\n%s", result.state.value, format_result(result))
    resolve(result, decide)
    lg.info("%s", format_resolution(result))
    return result
