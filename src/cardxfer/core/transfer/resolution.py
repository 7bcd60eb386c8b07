"""What happens to the temp file once a transfer is over.

A complete and verified file is promoted to its final name. A complete
file that could not be verified is promoted only if the caller's
``decide`` callback says so; otherwise the temp file stays as it is.
Incomplete transfers are never promoted.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cardxfer.core.transfer.receiver import TransferResult

lg = logging.getLogger(__name__)


class Resolution(enum.Enum):
    KEPT = "kept"
    DISCARDED = "discarded"
    PARTIAL = "partial"
    NOTHING = "nothing"


def resolve(
    result: TransferResult, decide: Callable[[TransferResult], bool],
) -> Resolution:
    """Promote or leave the temp file and record the decision on result."""
    if result.sink is None:
        resolution = Resolution.NOTHING
    elif not result.transfer_complete:
        lg.warning("transfer incomplete, partial data left in %s", result.sink.temp_path)
        resolution = Resolution.PARTIAL
    elif result.checksum_verified:
        result.sink.promote()
        resolution = Resolution.KEPT
    elif decide(result):
        lg.warning("keeping %s without a verified checksum", result.identity.filename)
        result.sink.promote()
        resolution = Resolution.KEPT
    else:
        lg.info("not kept, data left in %s", result.sink.temp_path)
        resolution = Resolution.DISCARDED
    result.resolution = resolution
    return resolution
