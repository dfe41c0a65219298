"""Configuration schema definitions.

Uses TypedDict for type safety without runtime overhead.
These types match the structure of config.toml.
"""

from typing import TypedDict


class DefaultsConfig(TypedDict, total=False):
    """Default settings applied to all operations.

    Attributes:
        encoding: Transfer encoding for body parts ("quoted-printable" or "base64").
        timeout: SMTP socket timeout in seconds.
    """

    encoding: str
    timeout: int


class AccountConfig(TypedDict, total=False):
    """Single outgoing mail account.

    Attributes:
        host: SMTP relay host name.
        port: SMTP relay port (587 for submission, 25 for relay).
        username: Login for SMTP AUTH. Omit to send without authentication.
        password: Optional password (prefer the DEPECHE_SMTP_PASSWORD env var).
        sender: Default From mailbox, e.g. "Alice <alice@example.com>".
    """

    host: str
    port: int
    username: str
    password: str
    sender: str


class DepecheConfig(TypedDict, total=False):
    """Root configuration structure.

    Attributes:
        defaults: Default settings for all operations.
        accounts: Dict mapping account names to their configurations.
    """

    defaults: DefaultsConfig
    accounts: dict[str, AccountConfig]
