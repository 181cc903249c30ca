# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment value object.

An attachment is either *inline* (it carries a content id and is referenced
from the HTML body through ``cid:``) or a *regular* attachment offered to the
recipient as a file.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Callable, Union

from .errors import InvalidArgumentError

ContentSource = Union[bytes, Callable[[], bytes]]


def guess_mime(filename: str) -> str:
    """Determine the MIME type for a filename based on its extension."""
    mt, _ = mimetypes.guess_type(filename)
    return mt or "application/octet-stream"


class Attachment:
    """A single binary part of a message.

    Args:
        name: File name as shown to the recipient.
        contents: Raw bytes, or a zero-argument callable returning them.
            Callables are invoked on every access, so file-backed
            attachments are read when the message is encoded.
        type: MIME content type. Guessed from ``name`` when omitted.
        id: Content identifier. Makes the attachment inline.

    Raises:
        InvalidArgumentError: If ``name``, ``type`` or ``id`` contains CR or LF.
    """

    def __init__(
        self,
        name: str,
        contents: ContentSource,
        type: str | None = None,
        id: str | None = None,
    ):
        for value in (name, type or "", id or ""):
            if "\r" in value or "\n" in value:
                raise InvalidArgumentError(f"Attachment field {value!r} must not contain CR or LF characters")
        self.name = name
        self.type = type or guess_mime(name)
        self.id = id
        self._contents = contents

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        name: str | None = None,
        type: str | None = None,
        id: str | None = None,
    ) -> Attachment:
        """Create an attachment whose bytes are read from ``path`` on encode.

        A missing or unreadable file raises the underlying ``OSError`` at
        encode time.
        """
        file_path = Path(path)
        return cls(name or file_path.name, file_path.read_bytes, type=type, id=id)

    @property
    def contents(self) -> bytes:
        """The attachment bytes, resolving lazy sources."""
        if callable(self._contents):
            return self._contents()
        return self._contents

    @property
    def is_inline(self) -> bool:
        """True when the attachment has a content id."""
        return bool(self.id)

    def __repr__(self) -> str:
        return f"Attachment(name={self.name!r}, type={self.type!r}, id={self.id!r})"
