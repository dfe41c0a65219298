"""Compose command implementation.

Builds a message from command line options and writes the raw RFC 5322
bytes to stdout or a file, without sending anything.
"""

import sys
from pathlib import Path

import typer
from typing_extensions import Annotated

from depeche.encoding import TransferEncoder, available_encodings, get_encoder
from depeche.message import Message

app = typer.Typer(help="Build a message and print it without sending")

ENCODING_HELP = f"Transfer encoding: {', '.join(available_encodings())}"


def read_body(value: str | None) -> str | None:
    """Return a body option's text, reading stdin when the value is "-"."""
    if value == "-":
        return sys.stdin.read()
    return value


def resolve_encoder(encoding: str | None) -> TransferEncoder | None:
    """Look up --encoding, exiting with an error on unknown names."""
    if encoding is None:
        return None
    try:
        return get_encoder(encoding)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


def build_message(
    *,
    to: list[str] | None,
    cc: list[str] | None,
    bcc: list[str] | None,
    sender: str,
    subject: str,
    text: str | None,
    html: str | None,
    encoder: TransferEncoder | None = None,
) -> Message:
    """Assemble a Message from CLI options.

    The plain text part goes first so mail clients prefer the HTML part
    when both are given.
    """
    message = Message(sender=sender, subject=subject)
    if encoder is not None:
        message.encoder = encoder

    for mailbox in to or []:
        message.add_recipient(mailbox)
    for mailbox in cc or []:
        message.add_cc(mailbox)
    for mailbox in bcc or []:
        message.add_bcc(mailbox)

    if text is not None:
        message.add_text_body(text)
    if html is not None:
        message.add_html_body(html)

    return message


@app.callback(invoke_without_command=True)
def compose(
    ctx: typer.Context,
    to: Annotated[list[str] | None, typer.Option("--to", help="Recipient(s)")] = None,
    cc: Annotated[list[str] | None, typer.Option("--cc", help="CC recipient(s)")] = None,
    bcc: Annotated[list[str] | None, typer.Option("--bcc", help="BCC recipient(s)")] = None,
    from_: Annotated[str, typer.Option("--from", help="Sender mailbox")] = "",
    subject: Annotated[str, typer.Option("--subject", help="Email subject")] = "",
    text: Annotated[str | None, typer.Option("--text", help="Plain text body ('-' reads stdin)")] = None,
    html: Annotated[str | None, typer.Option("--html", help="HTML body ('-' reads stdin)")] = None,
    encoding: Annotated[str | None, typer.Option("--encoding", help=ENCODING_HELP)] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to file instead of stdout")] = None,
):
    """Build a message and print its RFC 5322 form."""
    text = read_body(text)
    html = read_body(html)

    if text is None and html is None:
        typer.echo("Must specify --text or --html", err=True)
        raise typer.Exit(1)

    message = build_message(
        to=to,
        cc=cc,
        bcc=bcc,
        sender=from_,
        subject=subject,
        text=text,
        html=html,
        encoder=resolve_encoder(encoding),
    )
    raw = message.format()

    if output is not None:
        output.write_bytes(raw)
        typer.echo(f"Wrote {len(raw)} bytes to {output}")
    else:
        typer.echo(raw, nl=False)
