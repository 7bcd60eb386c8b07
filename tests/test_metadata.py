from __future__ import annotations

from cardxfer.core.transfer.metadata import FileIdentity, sanitize


def test_name_and_extension():
    identity = FileIdentity.from_payload(b"report\npdf")
    assert identity.name == "report"
    assert identity.extension == "pdf"
    assert identity.filename == "report.pdf"
    assert identity.temp_filename == "report.pdf.temp"


def test_split_on_first_newline_only():
    identity = FileIdentity.from_payload(b"notes\ntar\ngz")
    assert identity.name == "notes"
    assert identity.extension == "tar_gz"


def test_crlf_is_stripped():
    assert FileIdentity.from_payload(b"photo\r\njpg\r\n").filename == "photo.jpg"


def test_missing_parts_use_defaults():
    assert FileIdentity.from_payload(b"").filename == "received_file.bin"
    assert FileIdentity.from_payload(b"\n").filename == "received_file.bin"
    assert FileIdentity.from_payload(b"readme").filename == "readme.bin"
    assert FileIdentity.from_payload(b"\ntxt").filename == "received_file.txt"


def test_reserved_characters_are_replaced():
    identity = FileIdentity.from_payload(b'../etc/pass:wd?*"<>|\npdf')
    assert identity.name == ".._etc_pass_wd______"
    assert "/" not in identity.filename


def test_dot_names_fall_back():
    assert FileIdentity.from_payload(b"..\ntxt").name == "received_file"


def test_invalid_utf8_is_replaced():
    identity = FileIdentity.from_payload(b"caf\xe9\ntxt")
    assert identity.name == "caf\ufffd"


def test_sanitize():
    assert sanitize("a\\b/c:d") == "a_b_c_d"
    assert sanitize("plain name") == "plain name"
