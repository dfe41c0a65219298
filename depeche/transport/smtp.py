"""SMTP delivery of pre-formatted messages.

Opens one session per send: EHLO, STARTTLS when the server offers it,
AUTH when credentials are given, then MAIL/RCPT/DATA with the raw
message bytes. Nothing is retried; smtplib and socket errors reach the
caller unchanged.
"""

import logging
import smtplib
import ssl

from depeche.transport.models import SMTPAuth

log = logging.getLogger(__name__)

# Default SMTP port when the address has none
DEFAULT_PORT = 25


def split_address(address: str) -> tuple[str, int]:
    """Split a "host:port" server address.

    Args:
        address: Server address, e.g. "smtp.example.com:587". The port is
                 optional and defaults to 25.

    Returns:
        (host, port) tuple.

    Raises:
        ValueError: If the port is not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, DEFAULT_PORT

    if not port.isdigit():
        raise ValueError(f"Invalid port in server address: {address!r}")

    return host, int(port)


class SMTPTransport:
    """Transport that relays messages through an SMTP server.

    Example:
        transport = SMTPTransport(timeout=10)
        transport.send(
            "smtp.example.com:587",
            SMTPAuth("me@example.com", "secret"),
            "me@example.com",
            ["you@example.com"],
            message.format(),
        )
    """

    def __init__(self, timeout: float = 30.0):
        """Initialize the transport.

        Args:
            timeout: Socket timeout in seconds for the whole session.
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Socket timeout in seconds."""
        return self._timeout

    def send(
        self,
        address: str,
        auth: SMTPAuth | None,
        sender: str,
        recipients: list[str],
        message: bytes,
    ) -> None:
        """Deliver ``message`` to ``recipients`` through the server at ``address``.

        Raises:
            ValueError: If the address has a malformed port.
            smtplib.SMTPException: On any SMTP-level failure.
            OSError: If the server cannot be reached.
        """
        host, port = split_address(address)
        log.info(
            "Sending message from %s to %d recipient(s) via %s:%d",
            sender,
            len(recipients),
            host,
            port,
        )

        with smtplib.SMTP(host, port, timeout=self._timeout) as smtp:
            smtp.ehlo()

            if smtp.has_extn("starttls"):
                log.debug("Server offers STARTTLS, upgrading connection")
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()

            if auth is not None:
                log.debug("Authenticating as %s", auth.username)
                smtp.login(auth.username, auth.password)

            smtp.sendmail(sender, recipients, message)

        log.debug("Message accepted by %s", host)


def send_mail(
    address: str,
    auth: SMTPAuth | None,
    sender: str,
    recipients: list[str],
    message: bytes,
) -> None:
    """Send a raw message with a default SMTPTransport."""
    SMTPTransport().send(address, auth, sender, recipients, message)
