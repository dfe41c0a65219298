"""Mail transports.

A transport takes an already formatted message and delivers it. The
message builder only relies on the Transport protocol below, so tests
and alternative relays can stand in for SMTP.

Usage:
    from depeche.transport import SMTPAuth, send_mail

    send_mail("smtp.example.com:587", SMTPAuth("me", "pw"),
              "me@example.com", ["you@example.com"], raw_bytes)
"""

from typing import Protocol, runtime_checkable

from .models import SMTPAuth
from .smtp import SMTPTransport, send_mail, split_address

__all__ = [
    "Transport",
    "SMTPAuth",
    "SMTPTransport",
    "send_mail",
    "split_address",
]


@runtime_checkable
class Transport(Protocol):
    """Anything that can deliver a raw message to a relay."""

    def send(
        self,
        address: str,
        auth: SMTPAuth | None,
        sender: str,
        recipients: list[str],
        message: bytes,
    ) -> None:
        """Deliver the message; raise on failure."""
        ...
