"""Email message construction.

Builds RFC 5322 messages with a multipart/alternative body. Headers are
folded at 78 columns, every body part goes through the message's
transfer encoder, and the MIME boundary is derived from a digest of the
message content.

Usage:
    from depeche.message import Message, format_mailbox

    msg = Message(sender=format_mailbox("alice@example.com", "Alice"))
    msg.subject = "Lunch"
    msg.add_recipient("bob@example.com")
    msg.add_text_body("Noon?")
    msg.add_html_body("<p>Noon?</p>")

    raw = msg.format()
    msg.send("smtp.example.com:587", SMTPAuth("alice", "secret"))
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime

from depeche.encoding import QuotedPrintableEncoder, TransferEncoder
from depeche.transport import SMTPAuth, SMTPTransport, Transport

from .folding import fold_header
from .identifier import message_digest
from .models import TEXT_HTML, TEXT_PLAIN, BodyPart

__all__ = ["Message", "BodyPart", "format_mailbox", "fold_header"]

log = logging.getLogger(__name__)


def format_mailbox(address: str, name: str = "") -> str:
    """Format an address and optional display name for use in headers.

    Examples:
        format_mailbox("bob@example.com")         # "bob@example.com"
        format_mailbox("bob@example.com", "Bob")  # "Bob <bob@example.com>"
    """
    if not name:
        return address
    return f"{name} <{address}>"


@dataclass
class Message:
    """An outgoing email.

    Recipients and bodies are append-only; sender and subject are plain
    attributes. Body parts are alternatives of the same content, written
    in the order they were added (put the preferred one last).

    Example:
        msg = Message(sender="me@example.com", subject="Hi")
        msg.add_recipient("you@example.com")
        msg.add_text_body("Hello")
        raw = msg.format()
    """

    sender: str = ""
    subject: str = ""
    to: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    bodies: list[BodyPart] = field(default_factory=list)
    encoder: TransferEncoder = field(default_factory=QuotedPrintableEncoder)

    def add_recipient(self, mailbox: str) -> None:
        """Add a To recipient."""
        self.to.append(mailbox)

    def add_cc(self, mailbox: str) -> None:
        """Add a Cc recipient."""
        self.cc.append(mailbox)

    def add_bcc(self, mailbox: str) -> None:
        """Add a Bcc recipient."""
        self.bcc.append(mailbox)

    def add_body(self, mime_type: str, body: str) -> None:
        """Add a body part of any MIME type."""
        self.bodies.append(BodyPart(mime_type, body))

    def add_html_body(self, body: str) -> None:
        """Add an HTML body part, using the utf-8 charset."""
        self.add_body(TEXT_HTML, body)

    def add_text_body(self, body: str) -> None:
        """Add a plain text body part, using the utf-8 charset."""
        self.add_body(TEXT_PLAIN, body)

    def message_id(self) -> str:
        """Return the content digest used as this message's identifier."""
        return message_digest(self)

    def format(self, date: datetime | None = None) -> bytes:
        """Render the message as RFC 5322 bytes with CRLF line endings.

        Args:
            date: Value of the Date header. Defaults to the current local
                  time; pass an aware datetime to get a numeric offset.

        Returns:
            The complete message, ready for a transport.
        """
        if date is None:
            date = datetime.now().astimezone()

        boundary = f"=_{self.message_id()}"
        formatted = _FormattedMessage(boundary, self.encoder)

        formatted.add_header("To", ", ".join(self.to))
        formatted.add_header("Cc", ", ".join(self.cc))
        formatted.add_header("Bcc", ", ".join(self.bcc))
        formatted.add_header("From", self.sender)
        formatted.add_header("Subject", self.subject)
        formatted.add_header("Date", format_datetime(date))
        formatted.add_header(
            "Content-Type", f'multipart/alternative; boundary="{boundary}"'
        )
        formatted.add_header("MIME-Version", "1.0")

        for part in self.bodies:
            formatted.add_body(part)

        if self.bodies:
            formatted.close()

        raw = formatted.getvalue()
        log.debug(
            "Formatted message %s: %d part(s), %d bytes",
            boundary,
            len(self.bodies),
            len(raw),
        )
        return raw

    def send(
        self,
        address: str,
        auth: SMTPAuth | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Format the message and deliver it to the To recipients.

        Args:
            address: Relay address, "host:port".
            auth: SMTP credentials, or None to skip AUTH.
            transport: Delivery backend. Defaults to SMTPTransport().

        Raises:
            Whatever the transport raises, unchanged (e.g. smtplib.SMTPException).
        """
        if transport is None:
            transport = SMTPTransport()
        transport.send(address, auth, self.sender, list(self.to), self.format())


class _FormattedMessage:
    """Accumulates the wire form of a message during Message.format()."""

    def __init__(self, boundary: str, encoder: TransferEncoder):
        self._buffer = io.BytesIO()
        self._delimiter = f"\r\n--{boundary}"
        self._encoder = encoder

    def _write(self, text: str) -> None:
        self._buffer.write(text.encode("utf-8"))

    def add_header(self, field_name: str, value: str) -> None:
        """Write a folded header line; empty values are skipped."""
        if value:
            self._write(fold_header(f"{field_name}: ", value))

    def add_body(self, part: BodyPart) -> None:
        """Write one body part with its headers, under the boundary."""
        self._write(self._delimiter + "\r\n")
        self.add_header("Content-Type", part.mime_type)
        self.add_header("Content-Transfer-Encoding", self._encoder.label())
        self._write("\r\n")

        self._buffer.write(self._encoder.encode(part.body_text.encode("utf-8")))
        self._write("\r\n")

    def close(self) -> None:
        """Write the closing boundary delimiter."""
        self._write(self._delimiter + "--\r\n")

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()
