from __future__ import annotations

import importlib

import pytest
from click.testing import CliRunner

from cardxfer.core.smartcard import TransportError
from cardxfer.core.transfer.emulator import SW_OK
from cardxfer.scripts import cardxfer

from conftest import ScriptedCard, sample_data

# the package re-exports session(), which hides the module attribute
transfer_session = importlib.import_module("cardxfer.app.transfer.session")


@pytest.fixture
def mismatching_card(monkeypatch):
    card = ScriptedCard(sample_data(300), name="photo", extension="jpg")
    card.handlers[0xB1] = lambda command: bytes(16) + SW_OK
    monkeypatch.setattr(transfer_session, "_open_card", lambda simulate: card)
    return card


def test_simulated_transfer(tmp_path):
    data = sample_data(700)
    src = tmp_path / "report.pdf"
    src.write_bytes(data)
    out = tmp_path / "out"

    result = CliRunner().invoke(
        cardxfer, ["--simulate", str(src), "-o", str(out), "--delay", "0"]
    )

    assert result.exit_code == 0, result.output
    assert (out / "report.pdf").read_bytes() == data
    assert not (out / "report.pdf.temp").exists()


def test_simulated_transfer_with_audit_log(tmp_path):
    src = tmp_path / "notes.txt"
    src.write_bytes(sample_data(250))
    audit = tmp_path / "audit.log"

    result = CliRunner().invoke(
        cardxfer,
        ["--simulate", str(src), "-o", str(tmp_path / "out"), "--delay", "0", "--audit-log", str(audit)],
    )

    assert result.exit_code == 0, result.output
    assert len(audit.read_text().splitlines()) == 2


def test_empty_file_fails(tmp_path):
    src = tmp_path / "empty.bin"
    src.write_bytes(b"")

    result = CliRunner().invoke(
        cardxfer, ["--simulate", str(src), "-o", str(tmp_path / "out"), "--delay", "0"]
    )

    assert result.exit_code == 1
    assert not (tmp_path / "out").exists()


def test_bad_aid(tmp_path):
    result = CliRunner().invoke(cardxfer, ["--aid", "zz"])
    assert result.exit_code == 2
    assert "not a hex string" in result.output


def test_mismatch_declined_at_prompt(tmp_path, mismatching_card):
    out = tmp_path / "out"

    result = CliRunner().invoke(cardxfer, ["-o", str(out), "--delay", "0"], input="n\n")

    assert result.exit_code == 1, result.output
    assert "Keep it anyway?" in result.output
    assert not (out / "photo.jpg").exists()
    assert (out / "photo.jpg.temp").read_bytes() == mismatching_card.data


def test_mismatch_accepted_at_prompt(tmp_path, mismatching_card):
    out = tmp_path / "out"

    result = CliRunner().invoke(cardxfer, ["-o", str(out), "--delay", "0"], input="y\n")

    assert result.exit_code == 0, result.output
    assert (out / "photo.jpg").read_bytes() == mismatching_card.data


def test_discard_on_mismatch_does_not_prompt(tmp_path, mismatching_card):
    out = tmp_path / "out"

    result = CliRunner().invoke(
        cardxfer, ["-o", str(out), "--delay", "0", "--discard-on-mismatch"]
    )

    assert result.exit_code == 1, result.output
    assert "Keep it anyway?" not in result.output
    assert not (out / "photo.jpg").exists()


def test_reader_service_unavailable(tmp_path, monkeypatch):
    class NoService(ScriptedCard):
        def list_readers(self):
            raise TransportError("cannot list readers: service not available")

    monkeypatch.setattr(transfer_session, "_open_card", lambda simulate: NoService(b"x"))

    result = CliRunner().invoke(cardxfer, ["-o", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
