# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for mime-mailer.

Commands:
    compose     Print the MIME document built from a JSON payload.
    send        Send a JSON payload through SMTP or an HTTP relay.
    mass-send   Send a JSON payload once per recipient listed in a file.

Example::

    mime-mailer compose message.json
    mime-mailer send message.json --config mailer.ini
    mime-mailer mass-send message.json recipients.txt --config mailer.ini
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .address import Address
from .config import MailerConfig
from .config_loader import LINE_FEEDS, load_config
from .encoder import MessageEncoder
from .errors import MailerError
from .message import Message
from .models import MessagePayload
from .transport import HttpRelayTransport, SmtpTransport, Transport

console = Console()
err_console = Console(stderr=True)


def run_async(coro):
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def load_message(payload_path: str) -> Message:
    """Read and validate a JSON payload file into a :class:`Message`."""
    path = Path(payload_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {payload_path}: {e}") from e

    try:
        payload = MessagePayload.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid message payload: {e}") from e

    return payload.to_message(base_dir=path.parent)


def read_recipients(recipients_path: str) -> list[Address]:
    """One address per non-empty line, ``#`` starts a comment."""
    addresses = []
    for line in Path(recipients_path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            addresses.append(Address.parse(line))
    return addresses


def build_transport(config: MailerConfig, kind: str) -> Transport:
    encoder = MessageEncoder(config.encoder)
    if kind == "http":
        return HttpRelayTransport(config.http_relay, encoder=encoder)
    return SmtpTransport(config.smtp, encoder=encoder)


@click.group()
@click.version_option(package_name="mime-mailer")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Compose and send MIME email messages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--line-feed",
    type=click.Choice(sorted(LINE_FEEDS)),
    default="lf",
    show_default=True,
    help="Line terminator of the printed document.",
)
def compose(payload: str, line_feed: str) -> None:
    """Print the MIME document for PAYLOAD."""
    try:
        message = load_message(payload)
        document = MessageEncoder().encode(message, line_feed=LINE_FEEDS[line_feed])
    except (MailerError, OSError) as e:
        print_error(str(e))
        sys.exit(1)
    click.echo(document)


@main.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", required=True, type=click.Path(dir_okay=False),
              help="Path to mailer.ini.")
@click.option("--transport", "-t", "kind", type=click.Choice(["smtp", "http"]), default="smtp",
              show_default=True, help="Delivery backend.")
def send(payload: str, config_path: str, kind: str) -> None:
    """Send PAYLOAD once to its own recipients."""
    try:
        config = load_config(config_path)
        message = load_message(payload)
        transport = build_transport(config, kind)
        run_async(transport.send(message))
    except (MailerError, OSError) as e:
        print_error(str(e))
        sys.exit(1)
    print_success(f"Sent {message.subject!r} to {len(message.recipients)} recipient(s)")


@main.command("mass-send")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.argument("recipients", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", required=True, type=click.Path(dir_okay=False),
              help="Path to mailer.ini.")
@click.option("--transport", "-t", "kind", type=click.Choice(["smtp", "http"]), default="smtp",
              show_default=True, help="Delivery backend.")
def mass_send(payload: str, recipients: str, config_path: str, kind: str) -> None:
    """Send PAYLOAD once per address listed in RECIPIENTS."""
    try:
        config = load_config(config_path)
        message = load_message(payload)
        addresses = read_recipients(recipients)
        transport = build_transport(config, kind)
    except (MailerError, OSError) as e:
        print_error(str(e))
        sys.exit(1)

    def progress(recipient, index):
        console.print(f"[dim]{index + 1}/{len(addresses)}[/dim] {recipient}")

    report = run_async(transport.mass_send(message, addresses, progress))

    if report.failures:
        table = Table(title="Failed recipients")
        table.add_column("#", justify="right")
        table.add_column("Recipient")
        table.add_column("Error", style="red")
        for failure in report.failures:
            table.add_row(str(failure.index + 1), str(failure.recipient), str(failure.error))
        console.print(table)
        print_error(f"{len(report.failures)} of {len(addresses)} sends failed")
        sys.exit(1)

    print_success(f"Sent {report.sent} message(s)")


if __name__ == "__main__":
    main()
