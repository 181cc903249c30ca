# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models for JSON message payloads.

These models validate message descriptions coming from files or APIs and
convert them into :class:`~mime_mailer.message.Message` objects.

Models:
    - AttachmentPayload: One attachment with its storage path
    - MessagePayload: Complete message description
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .address import Address
from .attachment import Attachment
from .message import RESERVED_HEADERS, Message, is_reserved_header
from .sources import resolve_source


class AttachmentPayload(BaseModel):
    """Email attachment specification.

    Attributes:
        filename: Name shown to the recipient.
        storage_path: ``base64:<content>`` or a filesystem path.
        mime_type: Optional MIME type override.
        content_id: Content id; makes the attachment inline.
    """

    model_config = ConfigDict(extra="forbid")

    filename: Annotated[
        str,
        Field(min_length=1, max_length=255, description="Attachment filename")
    ]
    storage_path: Annotated[
        str,
        Field(min_length=1, description="Storage path (base64:, /absolute, relative)")
    ]
    mime_type: Annotated[
        str | None,
        Field(default=None, description="MIME type override")
    ]
    content_id: Annotated[
        str | None,
        Field(default=None, description="Content-ID for inline attachments")
    ]

    def to_attachment(self, base_dir: str | Path | None = None) -> Attachment:
        return Attachment(
            self.filename,
            resolve_source(self.storage_path, base_dir=base_dir),
            type=self.mime_type,
            id=self.content_id,
        )


class MessagePayload(BaseModel):
    """Payload describing an email message.

    Attributes:
        from_addr: Sender address (``Name <user@host>`` accepted).
        to: Recipient address(es).
        cc: CC address(es).
        bcc: BCC address(es).
        subject: Email subject.
        text: Plain text body.
        html: HTML body.
        headers: Additional headers, one value or a list of values each.
        attachments: List of attachments.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_addr: Annotated[
        str | None,
        Field(default=None, alias="from", description="Sender email address")
    ]
    to: Annotated[
        list[str] | str,
        Field(default_factory=list, description="Recipient address(es)")
    ]
    cc: Annotated[
        list[str] | str | None,
        Field(default=None, description="CC address(es)")
    ]
    bcc: Annotated[
        list[str] | str | None,
        Field(default=None, description="BCC address(es)")
    ]
    subject: Annotated[
        str,
        Field(default="", description="Email subject")
    ]
    text: Annotated[
        str | None,
        Field(default=None, description="Plain text body")
    ]
    html: Annotated[
        str | None,
        Field(default=None, description="HTML body")
    ]
    headers: Annotated[
        dict[str, str | list[str]] | None,
        Field(default=None, description="Additional email headers")
    ]
    attachments: Annotated[
        list[AttachmentPayload] | None,
        Field(default=None, description="List of attachments")
    ]

    @field_validator("headers")
    @classmethod
    def no_reserved_headers(cls, v: dict[str, str | list[str]] | None) -> dict[str, str | list[str]] | None:
        """Reject headers that must be set through the dedicated fields."""
        if v:
            reserved = [name for name in v if is_reserved_header(name)]
            if reserved:
                raise ValueError(
                    f"{', '.join(reserved)} cannot be set in headers, "
                    f"use the dedicated fields for {', '.join(RESERVED_HEADERS)}"
                )
        return v

    @staticmethod
    def _addresses(value: list[str] | str | None) -> list[Address]:
        if not value:
            return []
        if isinstance(value, str):
            value = [value]
        return [Address.parse(item) for item in value]

    def to_message(self, base_dir: str | Path | None = None) -> Message:
        """Build a :class:`Message` from this payload.

        Args:
            base_dir: Directory relative attachment paths are resolved against.
        """
        message = (
            Message()
            .set_from(Address.parse(self.from_addr) if self.from_addr else None)
            .set_to(self._addresses(self.to))
            .set_cc(self._addresses(self.cc))
            .set_bcc(self._addresses(self.bcc))
            .set_subject(self.subject)
            .set_text(self.text)
            .set_html(self.html)
        )
        if self.headers:
            message.set_headers(self.headers)
        for attachment in self.attachments or []:
            message.add_attachment(attachment.to_attachment(base_dir))
        return message
