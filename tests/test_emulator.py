from __future__ import annotations

import pytest

from cardxfer.core.smartcard import TransportError
from cardxfer.core.transfer import FileCard, md5


@pytest.fixture
def card():
    return FileCard(bytes(range(256)) * 2, name="data", extension="bin")


def test_select_returns_size(card):
    assert card.process(bytes.fromhex("00A4040007F0010203040506")) == bytes.fromhex("00000200" "9000")


def test_select_without_file():
    assert FileCard(None).process(bytes.fromhex("00A4040000")) == b"\x6A\x82"


def test_read_binary_ignores_le(card):
    resp = card.process(bytes.fromhex("00B0000010"))
    assert resp[:-2] == bytes(range(230))
    assert resp[-2:] == b"\x90\x00"


def test_read_binary_tail(card):
    resp = card.process(bytes.fromhex("00B001CC28"))
    assert len(resp) == 512 - 460 + 2


def test_read_binary_past_end(card):
    assert card.process(bytes.fromhex("00B0020001")) == b"\x6B\x00"


def test_read_binary_without_file():
    assert FileCard(None).process(bytes.fromhex("00B0000001")) == b"\x69\x86"


def test_checksum(card):
    assert card.process(bytes.fromhex("00B1000000")) == md5(card.data) + b"\x90\x00"


def test_metadata(card):
    assert card.process(bytes.fromhex("00B2000000")) == b"data\nbin\x90\x00"


def test_unknown_instruction(card):
    assert card.process(bytes.fromhex("00CA000000")) == b"\x6D\x00"


def test_short_command(card):
    assert card.process(b"\x00\xA4") == b"\x6F\x00"


def test_transmit_requires_connection(card):
    with pytest.raises(TransportError):
        card.transmit(bytes.fromhex("00A4040000"))
    card.connect(card.list_readers()[0])
    assert card.transmit(bytes.fromhex("00A4040000"))[-2:] == b"\x90\x00"


def test_from_path(tmp_path):
    path = tmp_path / "photo.jpeg"
    path.write_bytes(b"jpeg")
    card = FileCard.from_path(path)
    assert (card.name, card.extension, card.data) == ("photo", "jpeg", b"jpeg")
