"""Tests for the CLI commands.

Uses typer.testing.CliRunner; the SMTP transport is mocked in send tests.
"""

import smtplib
from email import policy
from email.parser import BytesParser
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from depeche import __version__
from depeche.cli.main import app
from depeche.transport import SMTPAuth


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def mock_config():
    """Mock configuration for tests."""
    return {
        "defaults": {"encoding": "quoted-printable", "timeout": 15},
        "accounts": {
            "work": {
                "host": "smtp.example.com",
                "port": 587,
                "username": "alice@example.com",
                "password": "secret",
                "sender": "Alice <alice@example.com>",
            }
        },
    }


def parse(raw: bytes):
    return BytesParser(policy=policy.compat32).parsebytes(raw)


class TestVersion:
    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"depeche version {__version__}" in result.output


class TestComposeCommand:
    """Tests for compose command."""

    def test_writes_message_file(self, runner: CliRunner, tmp_path: Path):
        out = tmp_path / "message.eml"
        result = runner.invoke(
            app,
            [
                "compose",
                "--to", "a@x.com",
                "--to", "c@x.com",
                "--cc", "d@x.com",
                "--from", "b@x.com",
                "--subject", "Hi",
                "--text", "Hello",
                "--html", "<p>Hello</p>",
                "--output", str(out),
            ],
        )

        assert result.exit_code == 0
        assert "Wrote" in result.output

        raw = out.read_bytes()
        assert raw.startswith(b"To: a@x.com, c@x.com\r\n")
        parsed = parse(raw)
        assert parsed["Cc"] == "d@x.com"
        assert parsed["From"] == "b@x.com"
        parts = parsed.get_payload()
        assert [p.get_content_type() for p in parts] == ["text/plain", "text/html"]

    def test_prints_to_stdout(self, runner: CliRunner):
        result = runner.invoke(
            app, ["compose", "--to", "a@x.com", "--subject", "Hi", "--text", "Hello"]
        )

        assert result.exit_code == 0
        assert b"Subject: Hi\r\n" in result.stdout_bytes
        assert b"Content-Transfer-Encoding: quoted-printable\r\n" in result.stdout_bytes

    def test_encoding_option(self, runner: CliRunner, tmp_path: Path):
        out = tmp_path / "message.eml"
        result = runner.invoke(
            app,
            ["compose", "--text", "Hello", "--encoding", "base64", "--output", str(out)],
        )

        assert result.exit_code == 0
        assert b"Content-Transfer-Encoding: base64\r\n" in out.read_bytes()

    def test_body_from_stdin(self, runner: CliRunner, tmp_path: Path):
        out = tmp_path / "message.eml"
        result = runner.invoke(
            app,
            ["compose", "--text", "-", "--output", str(out)],
            input="piped body",
        )

        assert result.exit_code == 0
        part = parse(out.read_bytes()).get_payload()[0]
        assert part.get_payload(decode=True).startswith(b"piped body")

    def test_requires_body(self, runner: CliRunner):
        result = runner.invoke(app, ["compose", "--to", "a@x.com"])

        assert result.exit_code == 1
        assert "Must specify --text or --html" in result.output

    def test_unknown_encoding(self, runner: CliRunner):
        result = runner.invoke(app, ["compose", "--text", "x", "--encoding", "uuencode"])

        assert result.exit_code == 1
        assert "Unknown encoding" in result.output


class TestSendCommand:
    """Tests for send command."""

    def test_sends_through_account(
        self, runner: CliRunner, mock_config, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.delenv("DEPECHE_SMTP_PASSWORD", raising=False)

        with (
            patch("depeche.cli.commands.send.load_config", return_value=mock_config),
            patch("depeche.cli.commands.send.SMTPTransport") as mock_transport_cls,
        ):
            result = runner.invoke(
                app,
                ["send", "--to", "bob@example.com", "--subject", "Hi", "--text", "Hello"],
            )

        assert result.exit_code == 0, result.output
        assert "Sent message" in result.output

        mock_transport_cls.assert_called_once_with(timeout=15)
        transport = mock_transport_cls.return_value
        transport.send.assert_called_once()
        address, auth, sender, recipients, raw = transport.send.call_args.args
        assert address == "smtp.example.com:587"
        assert auth == SMTPAuth("alice@example.com", "secret")
        assert sender == "Alice <alice@example.com>"
        assert recipients == ["bob@example.com"]
        assert parse(raw)["From"] == "Alice <alice@example.com>"

    def test_from_overrides_account_sender(self, runner: CliRunner, mock_config):
        with (
            patch("depeche.cli.commands.send.load_config", return_value=mock_config),
            patch("depeche.cli.commands.send.SMTPTransport") as mock_transport_cls,
        ):
            result = runner.invoke(
                app,
                ["send", "--to", "bob@example.com", "--from", "other@example.com", "--text", "x"],
            )

        assert result.exit_code == 0
        assert mock_transport_cls.return_value.send.call_args.args[2] == "other@example.com"

    def test_requires_recipient(self, runner: CliRunner):
        result = runner.invoke(app, ["send", "--text", "Hello"])

        assert result.exit_code == 1
        assert "at least one --to" in result.output

    def test_requires_account_config(self, runner: CliRunner):
        with patch("depeche.cli.commands.send.load_config", return_value={}):
            result = runner.invoke(app, ["send", "--to", "bob@example.com", "--text", "x"])

        assert result.exit_code == 1
        assert "No account configured" in result.output

    def test_unknown_account_lists_known(self, runner: CliRunner, mock_config):
        with patch("depeche.cli.commands.send.load_config", return_value=mock_config):
            result = runner.invoke(
                app, ["send", "--account", "home", "--to", "bob@example.com", "--text", "x"]
            )

        assert result.exit_code == 1
        assert "Account 'home' not found" in result.output
        assert "Known accounts: work" in result.output

    def test_help_lists_encodings(self, runner: CliRunner):
        result = runner.invoke(app, ["send", "--help"])

        assert result.exit_code == 0
        assert "quoted-printable" in result.output
        assert "base64" in result.output

    def test_requires_host(self, runner: CliRunner):
        config = {"accounts": {"broken": {"sender": "a@x.com"}}}
        with patch("depeche.cli.commands.send.load_config", return_value=config):
            result = runner.invoke(app, ["send", "--to", "bob@example.com", "--text", "x"])

        assert result.exit_code == 1
        assert "no 'host' configured" in result.output

    def test_reports_transport_failure(self, runner: CliRunner, mock_config):
        with (
            patch("depeche.cli.commands.send.load_config", return_value=mock_config),
            patch("depeche.cli.commands.send.SMTPTransport") as mock_transport_cls,
        ):
            mock_transport_cls.return_value.send.side_effect = (
                smtplib.SMTPAuthenticationError(535, b"Authentication failed")
            )
            result = runner.invoke(app, ["send", "--to", "bob@example.com", "--text", "x"])

        assert result.exit_code == 1
        assert "Send failed" in result.output


class TestConfigCommand:
    """Tests for config subcommands."""

    def test_init_creates_file(self, runner: CliRunner, config_dir: Path):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert (config_dir / "config.toml").exists()

    def test_show_redacts_password(self, runner: CliRunner, mock_config):
        with patch("depeche.cli.commands.config.load_config", return_value=mock_config):
            result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "[accounts.work]" in result.output
        assert "host = smtp.example.com" in result.output
        assert "***REDACTED***" in result.output
        assert "secret" not in result.output

    def test_show_unknown_account(self, runner: CliRunner, mock_config):
        with patch("depeche.cli.commands.config.load_config", return_value=mock_config):
            result = runner.invoke(app, ["config", "show", "--account", "home"])

        assert result.exit_code == 1
        assert "Account 'home' not found" in result.output

    def test_set_value(self, runner: CliRunner, config_dir: Path):
        result = runner.invoke(app, ["config", "set", "accounts.work.port", "587"])

        assert result.exit_code == 0
        assert "port = 587" in (config_dir / "config.toml").read_text()

    def test_set_invalid_value(self, runner: CliRunner, config_dir: Path):
        result = runner.invoke(app, ["config", "set", "accounts.work.port", "abc"])

        assert result.exit_code == 1
        assert "Invalid value" in result.output
