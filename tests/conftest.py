from __future__ import annotations

from collections.abc import Callable

import pytest

from cardxfer.core.base import Agent
from cardxfer.core.transfer import FileCard, FileReceiver, TransferSettings, TransferTerminal


class ScriptedCard(FileCard):
    """FileCard that records every command and lets tests replace handlers per INS."""

    def __init__(self, data: bytes | None, name: str = "", extension: str = "") -> None:
        super().__init__(data, name, extension)
        self.handlers: dict[int, Callable[[bytes], bytes]] = {}
        self.commands: list[bytes] = []

    def process(self, command: bytes) -> bytes:
        self.commands.append(bytes(command))
        handler = self.handlers.get(command[1])
        if handler is not None:
            return handler(command)
        return super().process(command)

    def sent(self, ins: int) -> list[bytes]:
        return [c for c in self.commands if c[1] == ins]


def sample_data(size: int) -> bytes:
    return bytes((i * 7 + 3) & 0xFF for i in range(size))


@pytest.fixture
def make_receiver(tmp_path):
    def factory(card, sleep=lambda delay: None, **settings) -> FileReceiver:
        settings.setdefault("chunk_delay", 0)
        settings.setdefault("output_dir", tmp_path)
        terminal = TransferTerminal(Agent(card))
        terminal.connect()
        return FileReceiver(terminal, TransferSettings(**settings), sleep=sleep)

    return factory
