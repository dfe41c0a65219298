"""Depeche: build RFC 5322 email messages and hand them to an SMTP relay."""

from depeche.encoding import Base64Encoder, QuotedPrintableEncoder, TransferEncoder
from depeche.message import BodyPart, Message, format_mailbox
from depeche.transport import SMTPAuth, SMTPTransport, Transport, send_mail

__version__ = "0.1.0"

__all__ = [
    "Message",
    "BodyPart",
    "format_mailbox",
    "TransferEncoder",
    "QuotedPrintableEncoder",
    "Base64Encoder",
    "Transport",
    "SMTPTransport",
    "SMTPAuth",
    "send_mail",
    "__version__",
]
