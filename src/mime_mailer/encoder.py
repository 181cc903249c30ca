# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MIME message encoder.

Turns a :class:`~mime_mailer.message.Message` into RFC 2045/2046 text:

- :meth:`MessageEncoder.headers` serializes the top-level header lines.
- :meth:`MessageEncoder.body` emits the (possibly nested) multipart body.
- :meth:`MessageEncoder.encode` joins both with the configured line feed.

Body structure, outermost first::

    multipart/mixed            when regular attachments exist
      multipart/alternative    when both text and HTML exist
        text/plain             base64
        multipart/related      when inline attachments exist
          text/html            quoted-printable, minified
          inline parts         base64, Content-ID
      attachment parts         base64, Content-Disposition: attachment

Each envelope is only opened when needed, so a text-only message is a
single ``text/plain`` part and HTML with inline images but no regular
attachments starts directly with ``multipart/related``.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from email import quoprimime
from email.utils import encode_rfc2231

from .attachment import Attachment
from .boundary import ALTERNATIVE, MIXED, RELATED, BoundaryGenerator
from .config import EncoderConfig
from .headers import HeaderMap, check_header_value, encode_word, fold_name
from .logger import get_logger
from .message import Message

logger = get_logger(__name__)

PREAMBLE = "This is a multi-part message in MIME format."
UNDISCLOSED_RECIPIENTS = "undisclosed-recipients:;"


def detect_charset(text: str) -> str:
    """Return the charset a text part is encoded with."""
    return "us-ascii" if text.isascii() else "utf-8"


def wrap_base64(data: bytes, width: int = 76) -> list[str]:
    """Base64-encode ``data`` and split it into lines of at most ``width``."""
    encoded = base64.b64encode(data).decode("ascii")
    return [encoded[i:i + width] for i in range(0, len(encoded), width)]


def mime_param(key: str, value: str) -> str:
    """Render a ``key="value"`` MIME parameter using ASCII only.

    Non-ASCII values use the RFC 2231 extended form ``key*=utf-8''...``.
    """
    if value.isascii():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'{key}="{escaped}"'
    return f"{key}*={encode_rfc2231(value, 'utf-8')}"


def quoted_printable_lines(text: str, charset: str, width: int = 76) -> list[str]:
    """Quoted-printable encode ``text`` into soft-wrapped lines."""
    # quoprimime works on one character per byte
    raw = text.encode(charset).decode("latin-1")
    return quoprimime.body_encode(raw, maxlinelen=width, eol="\n").split("\n")


class MessageEncoder:
    """Encode messages into MIME header and body lines.

    The encoder holds configuration only. Boundaries live in a
    :class:`BoundaryGenerator` created for each :meth:`body` call, so one
    encoder can be shared across messages.
    """

    def __init__(self, config: EncoderConfig | None = None):
        self.config = config or EncoderConfig()

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def headers(self, message: Message, exclude: Iterable[str] = ()) -> list[str]:
        """Serialize the message headers.

        Output order: ``From``, ``To``, ``Cc``, ``Bcc``, the custom headers in
        insertion order, ``MIME-Version`` and ``Subject``. A custom header with
        several values yields one line per value.

        Args:
            message: Message to serialize.
            exclude: Header names to leave out, compared case-insensitively.
                ``MIME-Version`` is always emitted.

        Returns:
            Header lines without line terminators. Long word-encoded values
            continue on extra lines starting with a space.

        Raises:
            InvalidArgumentError: If a header value contains CR or LF.
        """
        excluded = {fold_name(name) for name in exclude}
        lines: list[str] = []

        if "from" not in excluded and message.from_addr is not None:
            lines.append(f"From: {message.from_addr}")

        if "to" not in excluded:
            if message.to:
                lines.append(f"To: {', '.join(str(a) for a in message.to)}")
            else:
                lines.append(f"To: {UNDISCLOSED_RECIPIENTS}")

        if "cc" not in excluded and message.cc:
            lines.append(f"Cc: {', '.join(str(a) for a in message.cc)}")

        if "bcc" not in excluded and message.bcc:
            lines.append(f"Bcc: {', '.join(str(a) for a in message.bcc)}")

        headers = HeaderMap(message.headers.to_dict())
        headers.set("MIME-Version", "1.0")
        if "subject" not in excluded:
            headers.set("Subject", message.subject)

        for name, values in headers.items():
            key = fold_name(name)
            if key in excluded and key != "mime-version":
                continue
            for value in values:
                check_header_value(name, value)
                encoded = encode_word(value.strip(), header_name=name)
                lines.append(f"{name}: {encoded[0]}")
                lines.extend(encoded[1:])

        return lines

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def _open_envelope(self, lines: list[str], subtype: str, boundary: str) -> None:
        lines.append(f'Content-Type: multipart/{subtype}; boundary="{boundary}"')
        lines.append("")
        lines.append(PREAMBLE)
        lines.append("")
        lines.append(f"--{boundary}")

    def _attachment_part(self, lines: list[str], attachment: Attachment, boundary: str) -> None:
        lines.append(f"--{boundary}")
        lines.append(f"Content-Type: {attachment.type}; {mime_param('name', attachment.name)}")
        lines.append("Content-Transfer-Encoding: base64")
        if attachment.is_inline:
            lines.append("Content-Disposition: inline")
            lines.append(f"Content-ID: <{attachment.id}>")
        else:
            lines.append("Content-Disposition: attachment;")
            lines.append(f"    {mime_param('filename', attachment.name)}")
        lines.append("")
        lines.extend(wrap_base64(attachment.contents, self.config.line_length))
        lines.append("")

    def body(self, message: Message, boundaries: BoundaryGenerator | None = None) -> list[str]:
        """Serialize the message body, including its top-level Content-Type.

        Args:
            message: Message to serialize.
            boundaries: Boundary context for this encode pass. A fresh one is
                created when omitted.

        Returns:
            Body lines without line terminators. Empty when the message has
            neither text nor HTML.

        Raises:
            OSError: If a lazy attachment source fails to read.
        """
        boundaries = boundaries or BoundaryGenerator(self.config)
        width = self.config.line_length
        inline = message.inline_attachments
        regular = message.regular_attachments
        lines: list[str] = []

        if not message.has_text and not message.has_html:
            logger.warning(f"Message {message!r} has neither text nor HTML body, body is empty")
            return lines

        if regular:
            self._open_envelope(lines, MIXED, boundaries.boundary(MIXED))

        alternative = message.has_text and message.has_html
        if alternative:
            self._open_envelope(lines, ALTERNATIVE, boundaries.boundary(ALTERNATIVE))

        if message.has_text:
            text = message.text or ""
            charset = detect_charset(text)
            lines.append(f'Content-Type: text/plain; charset="{charset}"; format=flowed; delsp=yes')
            lines.append("Content-Transfer-Encoding: base64")
            lines.append("")
            lines.extend(wrap_base64(text.encode(charset), width))
            lines.append("")

        if message.has_html:
            if alternative:
                lines.append(f"--{boundaries.boundary(ALTERNATIVE)}")

            if inline:
                self._open_envelope(lines, RELATED, boundaries.boundary(RELATED))

            charset = detect_charset(message.html or "")
            lines.append(f'Content-Type: text/html; charset="{charset}"; format=flowed; delsp=yes')
            lines.append("Content-Transfer-Encoding: quoted-printable")
            lines.append("")
            lines.extend(quoted_printable_lines(message.minified_html() or "", charset, width))
            lines.append("")

            if inline:
                for attachment in inline:
                    self._attachment_part(lines, attachment, boundaries.boundary(RELATED))
                lines.append(f"--{boundaries.boundary(RELATED)}--")

            if alternative:
                lines.append(f"--{boundaries.boundary(ALTERNATIVE)}--")

        if regular:
            for attachment in regular:
                self._attachment_part(lines, attachment, boundaries.boundary(MIXED))
            lines.append(f"--{boundaries.boundary(MIXED)}--")

        return lines

    # ------------------------------------------------------------------
    # Whole document
    # ------------------------------------------------------------------

    def lines(self, message: Message, exclude: Iterable[str] = ()) -> list[str]:
        """Header lines followed by body lines."""
        return [*self.headers(message, exclude), *self.body(message)]

    def encode(self, message: Message, exclude: Iterable[str] = (), line_feed: str | None = None) -> str:
        """Render the complete MIME document as text."""
        line_feed = line_feed or self.config.line_feed
        return line_feed.join(self.lines(message, exclude))

    def encode_bytes(self, message: Message, exclude: Iterable[str] = (), line_feed: str | None = None) -> bytes:
        """Render the complete MIME document as bytes ready for a socket."""
        return self.encode(message, exclude, line_feed).encode("utf-8")
