from __future__ import annotations

import logging

from smartcard.CardConnectionObserver import CardConnectionObserver

from cardxfer.core.smartcard.logging import PROTOCOL, TRACE, format_sw, log_hex

lg = logging.getLogger(__name__)


class LoggingCardObserver(CardConnectionObserver):
    """CardConnectionObserver that logs APDU traffic via Python logging."""

    def update(self, observable, event):
        if event.type in ("connect", "reconnect", "disconnect"):
            lg.log(PROTOCOL, event.type)

        elif event.type == "command":
            log_hex(lg, ">> ", bytes(event.args[0]))

        elif event.type == "response":
            data, sw1, sw2 = event.args[0], event.args[1], event.args[2]
            if data:
                log_hex(lg, "<< ", bytes(data))
            lg.log(TRACE, "<< %s", format_sw(sw1, sw2))
