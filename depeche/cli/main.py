"""Main CLI entry point for depeche."""

import logging

import typer
from typing_extensions import Annotated

from depeche import __version__
from depeche.cli import commands

app = typer.Typer(
    name="depeche",
    help="Compose RFC 5322 email messages and send them over SMTP",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(commands.compose.app, name="compose")
app.add_typer(commands.send.app, name="send")
app.add_typer(commands.config.app, name="config")


@app.callback()
def configure_logging(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
):
    """Compose RFC 5322 email messages and send them over SMTP."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version():
    """Show version information."""
    typer.echo(f"depeche version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
