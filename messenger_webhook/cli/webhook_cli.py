"""Typer-based command line for running and exercising the webhook."""

import os

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

import sys
from pathlib import Path

import typer

from messenger_webhook.config import get_settings
from messenger_webhook.constants import DEFAULT_HOST, SIGNATURE_HEADER
from messenger_webhook.services.signature import sign_payload

app = typer.Typer(help="Messenger webhook receiver.")


def _read_payload(source: str) -> bytes:
    """Read payload bytes from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    if not path.is_file():
        typer.echo(f"✗ No such file: {source}", err=True)
        raise typer.Exit(1)
    return path.read_bytes()


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, help="Interface to bind"),
    port: int | None = typer.Option(None, help="Port (defaults to PORT setting)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the webhook server under uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "messenger_webhook.main:app",
        host=host,
        port=port if port is not None else settings.port,
        reload=reload,
    )


@app.command()
def sign(
    source: str = typer.Argument(..., help="Payload file, or '-' for stdin"),
    header: bool = typer.Option(
        False, "--header", help=f"Print as a full '{SIGNATURE_HEADER}: ...' line"
    ),
):
    """Print the signature header value for a payload using APP_SECRET."""
    raw_body = _read_payload(source)
    signature = sign_payload(raw_body, get_settings().app_secret.get_secret_value())
    typer.echo(f"{SIGNATURE_HEADER}: {signature}" if header else signature)


if __name__ == "__main__":
    app()
