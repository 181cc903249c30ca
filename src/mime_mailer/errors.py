# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for mime-mailer.

All errors raised by the package derive from :class:`MailerError` so that
callers can catch package failures with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any


class MailerError(Exception):
    """Base class for every error raised by mime-mailer."""


class InvalidArgumentError(MailerError, ValueError):
    """Raised when a caller passes a value the API refuses.

    Typical cause: setting a reserved header (``Subject``, ``From``, ``To``,
    ``Cc``, ``Bcc``) through the generic header API.
    """


class ConfigError(MailerError):
    """Raised when a configuration file is missing or malformed."""


class TransportError(MailerError):
    """Raised by a transport when a message cannot be delivered.

    Attributes:
        details: Extra context about the failure (recipient, SMTP code, ...).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


__all__ = [
    "ConfigError",
    "InvalidArgumentError",
    "MailerError",
    "TransportError",
]
