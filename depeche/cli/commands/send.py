"""Send command implementation."""

import smtplib

import typer
from typing_extensions import Annotated

from depeche.cli.commands.compose import (
    ENCODING_HELP,
    build_message,
    read_body,
    resolve_encoder,
)
from depeche.config import (
    get_account,
    get_account_names,
    get_default_encoder,
    get_server_address,
    get_smtp_auth,
    get_timeout,
    load_config,
)
from depeche.transport import SMTPTransport

app = typer.Typer(help="Build a message and send it through a configured account")


@app.callback(invoke_without_command=True)
def send(
    ctx: typer.Context,
    to: Annotated[list[str] | None, typer.Option("--to", help="Recipient(s)")] = None,
    cc: Annotated[list[str] | None, typer.Option("--cc", help="CC recipient(s)")] = None,
    bcc: Annotated[list[str] | None, typer.Option("--bcc", help="BCC recipient(s)")] = None,
    from_: Annotated[str | None, typer.Option("--from", help="Sender mailbox (defaults to the account sender)")] = None,
    subject: Annotated[str, typer.Option("--subject", help="Email subject")] = "",
    text: Annotated[str | None, typer.Option("--text", help="Plain text body ('-' reads stdin)")] = None,
    html: Annotated[str | None, typer.Option("--html", help="HTML body ('-' reads stdin)")] = None,
    encoding: Annotated[str | None, typer.Option("--encoding", help=ENCODING_HELP)] = None,
    account: Annotated[str | None, typer.Option("--account", "-a", help="Account to send from")] = None,
):
    """Build a message and deliver it to the --to recipients over SMTP."""
    if not to:
        typer.echo("Must specify at least one --to recipient", err=True)
        raise typer.Exit(1)

    text = read_body(text)
    html = read_body(html)
    if text is None and html is None:
        typer.echo("Must specify --text or --html", err=True)
        raise typer.Exit(1)

    config = load_config()

    account_config = get_account(config, account)
    if not account_config:
        names = get_account_names(config)
        if names:
            typer.echo(f"Account '{account}' not found.", err=True)
            typer.echo(f"Known accounts: {', '.join(names)}")
        else:
            typer.echo("No account configured.", err=True)
            typer.echo()
            typer.echo("Run 'depeche config init' and add an account to config.toml")
        raise typer.Exit(1)

    address = get_server_address(account_config)
    if not address:
        typer.echo("Account has no 'host' configured.", err=True)
        raise typer.Exit(1)

    sender = from_ or account_config.get("sender", "")
    if not sender:
        typer.echo("No sender: pass --from or set 'sender' on the account.", err=True)
        raise typer.Exit(1)

    encoder = resolve_encoder(encoding)
    if encoder is None:
        try:
            encoder = get_default_encoder(config)
        except ValueError as e:
            typer.echo(f"Invalid config: {e}", err=True)
            raise typer.Exit(1)

    message = build_message(
        to=to,
        cc=cc,
        bcc=bcc,
        sender=sender,
        subject=subject,
        text=text,
        html=html,
        encoder=encoder,
    )
    transport = SMTPTransport(timeout=get_timeout(config))

    try:
        message.send(address, get_smtp_auth(account_config), transport=transport)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        typer.echo(f"Send failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Sent message {message.message_id()} to {', '.join(message.to)}")
