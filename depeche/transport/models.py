"""Data models for mail transports."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SMTPAuth:
    """Credentials for SMTP AUTH.

    The password is kept out of repr() so it never lands in logs or
    tracebacks.
    """

    username: str
    password: str = field(repr=False)
