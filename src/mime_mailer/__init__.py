# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MIME email composition and delivery.

Features:
    - RFC 2045/2046 multipart encoding (mixed / alternative / related)
    - Base64 text and attachment parts, quoted-printable HTML
    - RFC 2047 word-encoded headers, case-insensitive multi-value headers
    - SMTP (aiosmtplib) and HTTP relay (aiohttp) transports
    - Mass sending with per-recipient failure collection
    - SparkPost X-MSYS-API header injection

Example::

    from mime_mailer import Address, Message, MessageEncoder

    message = (
        Message()
        .set_from(Address("noreply@example.com"))
        .set_to([Address("john@example.com", "John")])
        .set_subject("Hello")
        .set_text("Hi John")
    )
    document = MessageEncoder().encode(message)
"""

from .address import Address
from .attachment import Attachment
from .boundary import BoundaryGenerator
from .config import EncoderConfig, HttpRelayConfig, MailerConfig, SmtpConfig
from .encoder import MessageEncoder
from .errors import ConfigError, InvalidArgumentError, MailerError, TransportError
from .headers import HeaderMap
from .message import RESERVED_HEADERS, Message

__all__ = [
    "Address",
    "Attachment",
    "BoundaryGenerator",
    "ConfigError",
    "EncoderConfig",
    "HeaderMap",
    "HttpRelayConfig",
    "InvalidArgumentError",
    "MailerConfig",
    "MailerError",
    "Message",
    "MessageEncoder",
    "RESERVED_HEADERS",
    "SmtpConfig",
    "TransportError",
]
