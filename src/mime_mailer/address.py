# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Mailbox address value used for From/To/Cc/Bcc headers."""

from __future__ import annotations

from dataclasses import dataclass
from email.utils import formataddr, parseaddr

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class Address:
    """An email address with an optional display name.

    The address is not validated beyond rejecting CR and LF; ``str()``
    renders it for a header.

    Example:
        >>> str(Address("john@example.com", "John Doe"))
        'John Doe <john@example.com>'
    """

    email: str
    name: str | None = None

    def __post_init__(self) -> None:
        for part in (self.email, self.name or ""):
            if "\r" in part or "\n" in part:
                raise InvalidArgumentError(f"Address {part!r} must not contain CR or LF characters")

    @classmethod
    def parse(cls, value: str) -> Address:
        """Build an address from ``Name <user@host>`` or ``user@host`` text."""
        name, email = parseaddr(value)
        return cls(email=email or value.strip(), name=name or None)

    def __str__(self) -> str:
        # formataddr quotes special characters and RFC 2047 encodes non-ASCII names
        return formataddr((self.name or "", self.email))
