# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration dataclasses for mime-mailer.

Provides a nested configuration structure:
- config.encoder.line_length
- config.smtp.host
- config.http_relay.url
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field


@dataclass
class EncoderConfig:
    """MIME encoder settings."""

    line_length: int = 76
    """Column width for base64 and quoted-printable body lines (RFC 2045)."""

    boundary_length: int = 24
    """Number of random characters in each boundary token."""

    boundary_alphabet: str = string.digits + string.ascii_uppercase
    """Characters boundary tokens are drawn from."""

    boundary_prefix: str | None = None
    """Optional fixed prefix joined to each boundary token with a hyphen."""

    line_feed: str = "\r\n"
    """Line terminator used when joining the rendered message."""


@dataclass
class SmtpConfig:
    """SMTP server settings."""

    host: str = "localhost"
    """SMTP server hostname."""

    port: int = 587
    """SMTP server port (465 for implicit TLS, 587 for STARTTLS)."""

    user: str | None = None
    """Username for SMTP authentication."""

    password: str | None = None
    """Password for SMTP authentication."""

    use_tls: bool = True
    """Use TLS (implicit on port 465, STARTTLS otherwise)."""

    timeout: float = 30.0
    """Timeout in seconds for connect and send operations."""


@dataclass
class HttpRelayConfig:
    """HTTP relay endpoint settings."""

    url: str | None = None
    """URL receiving the raw MIME document as JSON."""

    token: str | None = None
    """Bearer token for relay authentication."""

    user: str | None = None
    """Username for basic authentication."""

    password: str | None = None
    """Password for basic authentication."""

    timeout: float = 30.0
    """Total request timeout in seconds."""


@dataclass
class MailerConfig:
    """Main configuration container.

    Example:
        config = MailerConfig(
            smtp=SmtpConfig(host="smtp.example.com", user="me", password="secret"),
        )
        transport = SmtpTransport(config.smtp, encoder=MessageEncoder(config.encoder))
    """

    encoder: EncoderConfig = field(default_factory=EncoderConfig)
    """Encoder settings."""

    smtp: SmtpConfig = field(default_factory=SmtpConfig)
    """SMTP transport settings."""

    http_relay: HttpRelayConfig = field(default_factory=HttpRelayConfig)
    """HTTP relay transport settings."""


__all__ = [
    "EncoderConfig",
    "HttpRelayConfig",
    "MailerConfig",
    "SmtpConfig",
]
