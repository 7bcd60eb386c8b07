# filename : main.py
# created  : 10/19/2026


import logging
from collections.abc import Callable
from pathlib import Path

from cardxfer.app import transfer
from cardxfer.core.transfer import Resolution, TransferResult, TransferSettings

lg = logging.getLogger(__name__)


def main(
    settings: TransferSettings,
    decide: Callable[[TransferResult], bool],
    simulate: Path | None = None,
) -> int:
    """Run one transfer; returns the process exit code."""
    lg.debug("cardxfer v1")
    result = transfer.session(settings, decide, simulate=simulate)
    if result is not None and result.resolution is Resolution.KEPT:
        return 0
    return 1
