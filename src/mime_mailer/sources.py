# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment byte sources.

Resolves a ``storage_path`` into something :class:`~mime_mailer.attachment.Attachment`
can read:

- ``base64:...`` prefix -> inline base64 content (prefix is stripped)
- anything else -> filesystem path, absolute or relative to ``base_dir``

Filesystem sources are lazy: the file is read when the message is encoded.
"""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import Callable

from .errors import InvalidArgumentError

BASE64_PREFIX = "base64:"


def decode_base64(content: str) -> bytes:
    """Decode base64 text, tolerating missing padding."""
    content = content.strip()
    padding_needed = 4 - (len(content) % 4)
    if padding_needed != 4:
        content += "=" * padding_needed
    try:
        return base64.b64decode(content, validate=True)
    except binascii.Error as e:
        raise InvalidArgumentError(f"Invalid base64 content: {e}") from e


class FilesystemSource:
    """Lazy file reader with path traversal protection."""

    def __init__(self, path: str, base_dir: str | Path | None = None):
        self._base_dir = Path(base_dir).resolve() if base_dir else None
        self.path = self._resolve_and_validate(path)

    def _resolve_and_validate(self, path: str) -> Path:
        if not path:
            raise InvalidArgumentError("Empty path provided")

        path_obj = Path(path)
        if path_obj.is_absolute():
            resolved = path_obj.resolve()
        elif self._base_dir:
            resolved = (self._base_dir / path_obj).resolve()
        else:
            raise InvalidArgumentError(
                f"Relative path '{path}' not allowed without base_dir configuration"
            )

        if self._base_dir:
            try:
                resolved.relative_to(self._base_dir)
            except ValueError:
                raise InvalidArgumentError(
                    f"Path traversal detected: '{path}' resolves outside base directory"
                ) from None

        return resolved

    def __call__(self) -> bytes:
        # missing files surface as FileNotFoundError when the message is encoded
        return self.path.read_bytes()


def resolve_source(storage_path: str, base_dir: str | Path | None = None) -> bytes | Callable[[], bytes]:
    """Turn a storage path into attachment contents."""
    if storage_path.startswith(BASE64_PREFIX):
        return decode_base64(storage_path[len(BASE64_PREFIX):])
    return FilesystemSource(storage_path, base_dir=base_dir)
