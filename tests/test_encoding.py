"""Tests for transfer encoders."""

import base64

import pytest

from depeche.encoding import (
    Base64Encoder,
    QuotedPrintableEncoder,
    TransferEncoder,
    available_encodings,
    get_encoder,
)


@pytest.fixture
def qp() -> QuotedPrintableEncoder:
    return QuotedPrintableEncoder()


class TestQuotedPrintable:
    """Tests for QuotedPrintableEncoder."""

    def test_label(self, qp: QuotedPrintableEncoder):
        assert qp.label() == "quoted-printable"

    def test_plain_ascii_unchanged(self, qp: QuotedPrintableEncoder):
        assert qp.encode(b"Hello, world!") == b"Hello, world!"

    def test_equals_sign_escaped(self, qp: QuotedPrintableEncoder):
        assert qp.encode(b"a=b") == b"a=3Db"

    def test_non_ascii_escaped(self, qp: QuotedPrintableEncoder):
        assert qp.encode("café".encode("utf-8")) == b"caf=C3=A9"

    def test_lf_becomes_crlf(self, qp: QuotedPrintableEncoder):
        assert qp.encode(b"one\ntwo") == b"one\r\ntwo"

    def test_crlf_preserved(self, qp: QuotedPrintableEncoder):
        assert qp.encode(b"one\r\ntwo") == b"one\r\ntwo"

    def test_trailing_whitespace_escaped(self, qp: QuotedPrintableEncoder):
        assert qp.encode(b"end \nnext") == b"end=20\r\nnext"

    def test_long_line_soft_wrapped(self, qp: QuotedPrintableEncoder):
        encoded = qp.encode(b"a" * 200)

        lines = encoded.split(b"\r\n")
        assert len(lines) > 1
        assert all(len(line) <= 76 for line in lines)
        assert all(line.endswith(b"=") for line in lines[:-1])
        assert encoded.replace(b"=\r\n", b"") == b"a" * 200

    def test_satisfies_protocol(self, qp: QuotedPrintableEncoder):
        assert isinstance(qp, TransferEncoder)


class TestBase64:
    """Tests for Base64Encoder."""

    def test_label(self):
        assert Base64Encoder().label() == "base64"

    def test_short_input(self):
        assert Base64Encoder().encode(b"Hello") == b"SGVsbG8="

    def test_wrapped_with_crlf(self):
        data = bytes(range(256))
        encoded = Base64Encoder().encode(data)

        lines = encoded.split(b"\r\n")
        assert len(lines) > 1
        assert all(len(line) <= 76 for line in lines)
        assert not encoded.endswith(b"\r\n")
        assert base64.b64decode(encoded) == data

    def test_satisfies_protocol(self):
        assert isinstance(Base64Encoder(), TransferEncoder)


class TestGetEncoder:
    """Tests for encoder lookup by name."""

    def test_quoted_printable(self):
        assert isinstance(get_encoder("quoted-printable"), QuotedPrintableEncoder)

    def test_case_insensitive(self):
        assert isinstance(get_encoder("Base64"), Base64Encoder)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown encoding"):
            get_encoder("uuencode")

    def test_available_encodings(self):
        assert available_encodings() == ["quoted-printable", "base64"]
