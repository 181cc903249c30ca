# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email message value object.

A :class:`Message` holds everything the encoder needs: addresses, subject,
text and HTML bodies, attachments and custom headers. Reserved headers
(``Subject``, ``From``, ``To``, ``Cc``, ``Bcc``) are produced from the
dedicated fields only and cannot be set through the header API.

Example::

    message = (
        Message()
        .set_from(Address("noreply@example.com", "Example"))
        .set_to([Address("john@example.com")])
        .set_subject("Welcome")
        .set_text("Hello John")
        .set_html("<p>Hello <b>John</b></p>")
    )
    message.add_header("X-Campaign", "welcome")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .address import Address
from .attachment import Attachment
from .errors import InvalidArgumentError
from .headers import HeaderMap, check_header_value, fold_name
from .minify import minify_html

RESERVED_HEADERS = ("Subject", "From", "To", "Cc", "Bcc")
_RESERVED_KEYS = frozenset(fold_name(name) for name in RESERVED_HEADERS)


def is_reserved_header(name: str) -> bool:
    """True when ``name`` is one of the reserved header names."""
    return fold_name(name) in _RESERVED_KEYS


def _only_addresses(values: Iterable[object]) -> list[Address]:
    return [value for value in values if isinstance(value, Address)]


class Message:
    """Mutable description of an email to encode.

    Setters return the message itself so calls can be chained. Recipient
    lists silently drop elements that are not :class:`Address` instances
    and the attachment list drops non-:class:`Attachment` elements.
    """

    def __init__(self) -> None:
        self.headers = HeaderMap()
        self.from_addr: Address | None = None
        self.to: list[Address] = []
        self.cc: list[Address] = []
        self.bcc: list[Address] = []
        self.subject = ""
        self.text: str | None = None
        self.html: str | None = None
        self.attachments: list[Attachment] = []

    # Headers

    def set_headers(self, headers: Mapping[str, str | Iterable[str]]) -> Message:
        """Replace every custom header.

        Header values must already be safe for the wire or plain text that
        the encoder will word-encode; scalar values become one-item lists.

        Raises:
            InvalidArgumentError: If a reserved header name is used or a
                value contains CR or LF.
        """
        reserved = [name for name in headers if is_reserved_header(name)]
        if reserved:
            raise InvalidArgumentError(
                f"\"{', '.join(RESERVED_HEADERS)}\" are reserved headers, use the dedicated setters instead"
            )
        header_map = HeaderMap(dict(headers))
        for name, values in header_map.items():
            for value in values:
                check_header_value(name, value)
        self.headers = header_map
        return self

    def add_header(self, name: str, value: str, replace: bool = False) -> Message:
        """Add a custom header value.

        Args:
            name: Header name.
            value: Header value.
            replace: Replace existing values instead of appending.

        Raises:
            InvalidArgumentError: If ``name`` is a reserved header or
                ``value`` contains CR or LF.
        """
        if is_reserved_header(name):
            raise InvalidArgumentError(
                f"\"{name}\" is a reserved header, use the dedicated setter instead"
            )
        check_header_value(name, value)
        if replace:
            self.headers.set(name, [value])
        else:
            self.headers.add(name, value)
        return self

    def get_header(self, name: str) -> list[str]:
        """Return the values of a custom header (empty list when absent)."""
        return self.headers.get(name)

    def remove_header(self, name: str) -> Message:
        self.headers.remove(name)
        return self

    # Addresses

    def set_from(self, address: Address | None) -> Message:
        self.from_addr = address
        return self

    def set_to(self, addresses: Iterable[object]) -> Message:
        self.to = _only_addresses(addresses)
        return self

    def set_cc(self, addresses: Iterable[object]) -> Message:
        self.cc = _only_addresses(addresses)
        return self

    def set_bcc(self, addresses: Iterable[object]) -> Message:
        self.bcc = _only_addresses(addresses)
        return self

    def reset_recipients(self) -> Message:
        """Clear To, Cc and Bcc. The sender is kept."""
        self.to = []
        self.cc = []
        self.bcc = []
        return self

    @property
    def recipients(self) -> list[Address]:
        """Every envelope recipient: To, then Cc, then Bcc."""
        return [*self.to, *self.cc, *self.bcc]

    # Content

    def set_subject(self, subject: str) -> Message:
        check_header_value("Subject", subject)
        self.subject = subject
        return self

    def set_text(self, text: str | None) -> Message:
        self.text = text
        return self

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    def set_html(self, html: str | None) -> Message:
        self.html = html
        return self

    @property
    def has_html(self) -> bool:
        return bool(self.html)

    def minified_html(self) -> str | None:
        """The HTML body with structural whitespace collapsed."""
        if self.html is None:
            return None
        return minify_html(self.html)

    def set_attachments(self, attachments: Iterable[object]) -> Message:
        self.attachments = [att for att in attachments if isinstance(att, Attachment)]
        return self

    def add_attachment(self, attachment: Attachment) -> Message:
        self.attachments.append(attachment)
        return self

    @property
    def inline_attachments(self) -> list[Attachment]:
        """Attachments with a content id, in original order."""
        return [att for att in self.attachments if att.is_inline]

    @property
    def regular_attachments(self) -> list[Attachment]:
        """Attachments without a content id, in original order."""
        return [att for att in self.attachments if not att.is_inline]

    def __repr__(self) -> str:
        return (
            f"Message(from={self.from_addr!s}, to={[str(a) for a in self.to]}, "
            f"subject={self.subject!r}, attachments={len(self.attachments)})"
        )
