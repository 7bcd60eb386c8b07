from __future__ import annotations

from cardxfer.core.transfer.checksum import check, digests_equal, md5, to_hex, verify


def test_md5_vectors():
    assert to_hex(md5(b"")) == "d41d8cd98f00b204e9800998ecf8427e"
    assert to_hex(md5(b"abc")) == "900150983cd24fb0d6963f7d28e17f72"


def test_verify_ignores_case():
    assert verify("AB12", "ab12")


def test_verify_ignores_whitespace():
    assert verify("AB12", "ab 12")
    assert verify("90 01 50 98", "90015098")


def test_verify_detects_difference():
    assert not verify("AB12", "AB13")
    assert not verify("AB12", "AB120")


def test_verify_does_not_normalize_separators():
    assert not verify("ab:12", "ab12")


def test_digests_equal():
    assert digests_equal(b"\x01\x02", b"\x01\x02")
    assert not digests_equal(b"\x01\x02", b"\x01\x03")
    assert not digests_equal(b"\x01\x02", b"\x01\x02\x00")


def test_check_match():
    v = check(md5(b"payload"), b"payload")
    assert v.matched
    assert v.received_hex == v.calculated_hex
    assert v.written_hex is None
    assert v.write_path_ok


def test_check_mismatch():
    v = check(md5(b"payload"), b"paylaod")
    assert not v.matched
    assert v.received_hex == to_hex(md5(b"payload"))
    assert v.calculated_hex == to_hex(md5(b"paylaod"))


def test_check_reports_write_path_difference():
    v = check(md5(b"payload"), b"payload", written=md5(b"other"))
    assert v.matched
    assert not v.write_path_ok
