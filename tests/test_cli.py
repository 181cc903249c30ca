# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for CLI commands and helper functions."""

import email
import json
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from mime_mailer import Address, TransportError
from mime_mailer.cli import build_transport, load_message, main, read_recipients, run_async
from mime_mailer.config import MailerConfig, HttpRelayConfig
from mime_mailer.transport import HttpRelayTransport, MemoryTransport, SmtpTransport


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def payload_file(tmp_path):
    path = tmp_path / "message.json"
    path.write_text(
        json.dumps(
            {
                "from": "Shop <noreply@example.com>",
                "to": ["john@example.com"],
                "subject": "Your order",
                "text": "Thanks",
                "html": "<p>Thanks</p>",
            }
        )
    )
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "mailer.ini"
    path.write_text("[smtp]\nhost = mx.example.com\n\n[http_relay]\nurl = https://relay.example.com\n")
    return path


@pytest.fixture
def recipients_file(tmp_path):
    path = tmp_path / "recipients.txt"
    path.write_text("# customers\na@example.com\n\nBee <b@example.com>\nc@example.com\n")
    return path


class RejectingTransport(MemoryTransport):
    async def send(self, message):
        if message.to[0].email == "b@example.com":
            raise TransportError("550 mailbox unavailable")
        return await super().send(message)


# --- Helper function tests ---

class TestHelperFunctions:
    """Tests for CLI helper functions."""

    def test_run_async(self):
        async def async_func():
            return 42

        assert run_async(async_func()) == 42

    def test_read_recipients(self, recipients_file):
        assert read_recipients(str(recipients_file)) == [
            Address("a@example.com"),
            Address("b@example.com", "Bee"),
            Address("c@example.com"),
        ]

    def test_load_message(self, payload_file):
        message = load_message(str(payload_file))
        assert message.subject == "Your order"
        assert message.from_addr == Address("noreply@example.com", "Shop")

    def test_load_message_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(click.ClickException, match="Invalid JSON"):
            load_message(str(path))

    def test_load_message_invalid_payload(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"to": "a@example.com", "headers": {"Subject": "x"}}))
        with pytest.raises(click.ClickException, match="Invalid message payload"):
            load_message(str(path))

    def test_build_transport(self):
        config = MailerConfig(http_relay=HttpRelayConfig(url="https://relay.example.com"))
        assert isinstance(build_transport(config, "smtp"), SmtpTransport)
        assert isinstance(build_transport(config, "http"), HttpRelayTransport)


# --- Command tests ---

class TestCompose:
    """Tests for the compose command."""

    def test_prints_document(self, runner, payload_file):
        result = runner.invoke(main, ["compose", str(payload_file)])

        assert result.exit_code == 0
        parsed = email.message_from_string(result.output)
        assert parsed["Subject"] == "Your order"
        assert parsed.get_content_type() == "multipart/alternative"

    def test_missing_attachment_fails(self, runner, tmp_path):
        path = tmp_path / "message.json"
        path.write_text(
            json.dumps(
                {
                    "to": "a@example.com",
                    "text": "x",
                    "attachments": [{"filename": "gone.pdf", "storage_path": "gone.pdf"}],
                }
            )
        )

        result = runner.invoke(main, ["compose", str(path)])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestSend:
    """Tests for the send command."""

    def test_send(self, runner, payload_file, config_file):
        transport = MemoryTransport()
        with patch("mime_mailer.cli.build_transport", return_value=transport) as build:
            result = runner.invoke(main, ["send", str(payload_file), "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Sent 'Your order' to 1 recipient(s)" in result.output
        assert transport.outbox[0].recipients == ["john@example.com"]
        config, kind = build.call_args[0]
        assert config.smtp.host == "mx.example.com"
        assert kind == "smtp"

    def test_send_http(self, runner, payload_file, config_file):
        with patch("mime_mailer.cli.build_transport", return_value=MemoryTransport()) as build:
            runner.invoke(main, ["send", str(payload_file), "-c", str(config_file), "-t", "http"])
        assert build.call_args[0][1] == "http"

    def test_send_failure(self, runner, payload_file, config_file):
        transport = RejectingTransport()
        with patch("mime_mailer.cli.build_transport", return_value=transport):
            with patch.object(transport, "send", side_effect=TransportError("connection refused")):
                result = runner.invoke(main, ["send", str(payload_file), "-c", str(config_file)])

        assert result.exit_code == 1
        assert "connection refused" in result.output

    def test_missing_config(self, runner, payload_file, tmp_path):
        result = runner.invoke(main, ["send", str(payload_file), "-c", str(tmp_path / "none.ini")])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestMassSend:
    """Tests for the mass-send command."""

    def test_all_sent(self, runner, payload_file, recipients_file, config_file):
        transport = MemoryTransport()
        with patch("mime_mailer.cli.build_transport", return_value=transport):
            result = runner.invoke(
                main, ["mass-send", str(payload_file), str(recipients_file), "-c", str(config_file)]
            )

        assert result.exit_code == 0, result.output
        assert "Sent 3 message(s)" in result.output
        assert [sent.recipients for sent in transport.outbox] == [
            ["a@example.com"],
            ["b@example.com"],
            ["c@example.com"],
        ]

    def test_failures_reported(self, runner, payload_file, recipients_file, config_file):
        transport = RejectingTransport()
        with patch("mime_mailer.cli.build_transport", return_value=transport):
            result = runner.invoke(
                main, ["mass-send", str(payload_file), str(recipients_file), "-c", str(config_file)]
            )

        assert result.exit_code == 1
        assert "Failed recipients" in result.output
        assert "1 of 3 sends failed" in result.output
        assert len(transport.outbox) == 2
