"""Configuration management module.

Handles loading, saving, and accessing the depeche configuration.
Config is stored at ~/.config/depeche/config.toml

Usage:
    from depeche.config import load_config, get_account, get_smtp_auth

    config = load_config()
    account = get_account(config, "work")
    auth = get_smtp_auth(account)
"""

import os
import tomllib

import tomli_w

from depeche.encoding import TransferEncoder, get_encoder
from depeche.transport import SMTPAuth

from .paths import CONFIG_FILE, ensure_config_dir
from .schema import AccountConfig, DepecheConfig
from .template import CONFIG_TEMPLATE

# Re-export for convenience
__all__ = [
    "load_config",
    "save_config",
    "init_config",
    "get_account",
    "get_account_names",
    "get_server_address",
    "get_smtp_auth",
    "get_default_encoder",
    "get_timeout",
    "set_config_value",
    "CONFIG_FILE",
    "PASSWORD_ENV",
]

# Environment variable for the SMTP password.
# Preferred over storing the password in config.toml.
PASSWORD_ENV = "DEPECHE_SMTP_PASSWORD"

DEFAULT_ENCODING = "quoted-printable"
DEFAULT_TIMEOUT = 30

# Module-level cache for loaded config.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: DepecheConfig | None = None


def load_config(*, force_reload: bool = False) -> DepecheConfig:
    """Load configuration from disk.

    Returns empty dict if config file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The configuration dictionary.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    if not CONFIG_FILE.exists():
        _cached_config = {}
        return _cached_config

    with open(CONFIG_FILE, "rb") as f:
        _cached_config = tomllib.load(f)

    return _cached_config


def save_config(config: DepecheConfig) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.
    The file is made owner-readable only, since it may contain passwords.

    Args:
        config: The configuration dictionary to save.
    """
    global _cached_config

    ensure_config_dir()

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(config, f)
    CONFIG_FILE.chmod(0o600)

    # Keep cache in sync with disk
    _cached_config = config


def init_config(*, overwrite: bool = False) -> bool:
    """Initialize config directory and create template config file.

    Args:
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    ensure_config_dir()

    if CONFIG_FILE.exists() and not overwrite:
        return False

    CONFIG_FILE.write_text(CONFIG_TEMPLATE)
    CONFIG_FILE.chmod(0o600)
    return True


def get_account(
    config: DepecheConfig, name: str | None = None
) -> AccountConfig | None:
    """Get account configuration by name.

    Args:
        config: The loaded configuration dictionary.
        name: Account name to retrieve. If None, returns the first account.

    Returns:
        The account configuration, or None if not found.
    """
    accounts = config.get("accounts", {})

    if not accounts:
        return None

    if name is None:
        # Return first account as default
        return next(iter(accounts.values()))

    return accounts.get(name)


def get_account_names(config: DepecheConfig) -> list[str]:
    """Get list of configured account names."""
    return list(config.get("accounts", {}).keys())


def get_server_address(account: AccountConfig) -> str | None:
    """Build the "host:port" relay address for an account.

    Returns None when the account has no host. The port defaults to 25.
    """
    host = account.get("host")
    if not host:
        return None
    return f"{host}:{account.get('port', 25)}"


def get_smtp_auth(account: AccountConfig) -> SMTPAuth | None:
    """Get SMTP credentials for an account.

    The password comes from the DEPECHE_SMTP_PASSWORD environment variable,
    falling back to the account's ``password`` entry.

    Returns:
        SMTPAuth, or None if the account has no username (send without AUTH).
    """
    username = account.get("username")
    if not username:
        return None

    password = os.environ.get(PASSWORD_ENV) or account.get("password", "")
    return SMTPAuth(username, password)


def get_default_encoder(config: DepecheConfig) -> TransferEncoder:
    """Create the body encoder named in [defaults].

    Raises:
        ValueError: If the configured encoding is unknown.
    """
    label = config.get("defaults", {}).get("encoding", DEFAULT_ENCODING)
    return get_encoder(label)


def get_timeout(config: DepecheConfig) -> int:
    """SMTP timeout in seconds from [defaults]."""
    return config.get("defaults", {}).get("timeout", DEFAULT_TIMEOUT)


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value using dot notation.

    Examples:
        set_config_value("defaults.encoding", "base64")
        set_config_value("accounts.work.port", "587")

    Args:
        key: Dot-separated key path (e.g., "accounts.work.host").
        value: Value to set (will be type-converted for known fields).

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    config = load_config(force_reload=True)

    parts = key.split(".")

    # Navigate to parent dict, creating intermediate dicts as needed
    current: dict = config
    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    # Set the final value with type conversion
    final_key = parts[-1]
    converted_value = _convert_value(final_key, value)
    current[final_key] = converted_value

    save_config(config)


def _convert_value(key: str, value: str) -> str | int:
    """Convert string value to appropriate type based on field name.

    Known integer fields are converted to int, encodings are checked
    against the known encoders, everything else stays str.

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    # Fields that should be integers
    int_fields = {"port", "timeout"}

    if key in int_fields:
        return int(value)

    if key == "encoding":
        # Raises ValueError for unknown encodings
        return get_encoder(value).label()

    return value
