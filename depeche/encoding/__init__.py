"""Content transfer encoders for message bodies.

A transfer encoder turns raw body bytes into a wire-safe representation
and names the scheme it uses, so the builder can write a matching
Content-Transfer-Encoding header. Any object with ``encode()`` and
``label()`` qualifies; the builder never looks further than that.

Usage:
    from depeche.encoding import QuotedPrintableEncoder, get_encoder

    encoder = QuotedPrintableEncoder()
    wire = encoder.encode("Price = 5€".encode("utf-8"))
    encoder.label()  # "quoted-printable"

    encoder = get_encoder("base64")
"""

import base64
import quopri
from typing import Protocol, runtime_checkable

__all__ = [
    "TransferEncoder",
    "QuotedPrintableEncoder",
    "Base64Encoder",
    "get_encoder",
    "available_encodings",
]

CRLF = b"\r\n"


@runtime_checkable
class TransferEncoder(Protocol):
    """Capability required by the message builder to prepare a body for the wire."""

    def encode(self, data: bytes) -> bytes:
        """Return ``data`` in this encoding, using CRLF line endings."""
        ...

    def label(self) -> str:
        """Return the Content-Transfer-Encoding name of this encoding."""
        ...


def _to_crlf(data: bytes) -> bytes:
    """Rewrite bare LF line endings as CRLF."""
    return data.replace(b"\n", CRLF)


class QuotedPrintableEncoder:
    """Quoted-printable encoding (RFC 2045 section 6.7).

    Printable ASCII passes through untouched. ``=``, control characters,
    non-ASCII bytes and whitespace at the end of a line are escaped as
    ``=XX``, and lines longer than 76 columns get a soft break (``=\\r\\n``).
    """

    def encode(self, data: bytes) -> bytes:
        # quopri works on LF-terminated lines; normalize first so an
        # incoming CRLF is not escaped as =0D.
        encoded = quopri.encodestring(data.replace(CRLF, b"\n"), quotetabs=False)
        return _to_crlf(encoded)

    def label(self) -> str:
        return "quoted-printable"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Base64Encoder:
    """Base64 encoding wrapped at 76 columns (RFC 2045 section 6.8)."""

    def encode(self, data: bytes) -> bytes:
        return _to_crlf(base64.encodebytes(data)).rstrip(CRLF)

    def label(self) -> str:
        return "base64"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# Encoders selectable by name from config and the CLI
_ENCODERS: dict[str, type] = {
    "quoted-printable": QuotedPrintableEncoder,
    "base64": Base64Encoder,
}


def available_encodings() -> list[str]:
    """Names accepted by get_encoder()."""
    return list(_ENCODERS)


def get_encoder(label: str) -> TransferEncoder:
    """Create the encoder registered under ``label``.

    Args:
        label: Encoding name, case-insensitive (e.g., "quoted-printable").

    Returns:
        A fresh encoder instance.

    Raises:
        ValueError: If no encoder is known by that name.
    """
    try:
        encoder_cls = _ENCODERS[label.strip().lower()]
    except KeyError:
        known = ", ".join(_ENCODERS)
        raise ValueError(f"Unknown encoding '{label}'. Use one of: {known}")
    return encoder_cls()
