from __future__ import annotations

import io
from types import SimpleNamespace

import pytest
from PIL import Image

from src.campus_attendance.campus_attendance.attendance import qr_scanner
from src.campus_attendance.campus_attendance.core.exceptions import ValidationError


def _png() -> io.BytesIO:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), "white").save(buf, format="PNG")
    buf.seek(0)
    return buf


def test_returns_first_payload_stripped(monkeypatch):
    monkeypatch.setattr(
        qr_scanner,
        "pyzbar_decode",
        lambda img: [SimpleNamespace(data=b" CAMPUS_SESS:SESS_1:482913\n"), SimpleNamespace(data=b"other")],
    )
    assert qr_scanner.decode_qr_payload(_png()) == "CAMPUS_SESS:SESS_1:482913"


def test_no_code_found(monkeypatch):
    monkeypatch.setattr(qr_scanner, "pyzbar_decode", lambda img: [])
    assert qr_scanner.decode_qr_payload(_png()) is None


def test_non_utf8_payload_is_decoded_lossily(monkeypatch):
    monkeypatch.setattr(qr_scanner, "pyzbar_decode", lambda img: [SimpleNamespace(data=b"\xff\xfeSESS")])

    payload = qr_scanner.decode_qr_payload(_png())

    assert payload.endswith("SESS")
    assert "\ufffd" in payload


def test_unreadable_upload_is_a_validation_error():
    with pytest.raises(ValidationError):
        qr_scanner.decode_qr_payload(io.BytesIO(b"not an image"))
