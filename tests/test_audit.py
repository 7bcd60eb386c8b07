from __future__ import annotations

from cardxfer.core.transfer.audit import AuditLog
from cardxfer.core.transfer.checksum import md5, to_hex

from conftest import ScriptedCard, sample_data


def test_one_line_per_chunk(make_receiver, tmp_path):
    data = sample_data(500)
    audit_path = tmp_path / "audit.log"

    make_receiver(ScriptedCard(data), audit_log=audit_path).receive()

    lines = audit_path.read_text().splitlines()
    assert len(lines) == 3
    for index, (line, offset) in enumerate(zip(lines, (0, 230, 460)), 1):
        chunk = data[offset : offset + 230]
        assert f"chunk={index} offset={offset} len={len(chunk)}" in line
        assert line.endswith(f"md5={to_hex(md5(chunk))}")


def test_appends(tmp_path):
    path = tmp_path / "audit.log"
    with AuditLog(path) as audit:
        audit.chunk(1, 0, b"a")
    with AuditLog(path) as audit:
        audit.chunk(1, 0, b"b")
    assert len(path.read_text().splitlines()) == 2


def test_disabled_without_path():
    with AuditLog(None) as audit:
        audit.chunk(1, 0, b"a")


def test_unwritable_path_does_not_raise(tmp_path):
    with AuditLog(tmp_path / "missing" / "audit.log") as audit:
        audit.chunk(1, 0, b"a")
