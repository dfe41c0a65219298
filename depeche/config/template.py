"""Default configuration template.

This template is written to ~/.config/depeche/config.toml
when running `depeche config init`.
"""

CONFIG_TEMPLATE = """\
# Depeche Configuration

[defaults]
encoding = "quoted-printable"
timeout = 30

# Add your outgoing mail accounts below.
# Example submission server:
#
# [accounts.work]
# host = "smtp.example.com"
# port = 587
# username = "alice@example.com"
# sender = "Alice <alice@example.com>"
#
# For the password, use the DEPECHE_SMTP_PASSWORD environment variable,
# or add password = "..." to the account (the file is only readable by you).
#
# Then send with:
#   depeche send --account work --to bob@example.com --subject Hi --text Hello
"""
