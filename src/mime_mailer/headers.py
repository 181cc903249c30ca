# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Custom header storage and RFC 2047 word encoding.

:class:`HeaderMap` is an ordered multimap: a header name maps to an ordered
list of values, names are compared case-insensitively and keep the casing
they were first stored with.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from email.charset import QP, Charset
from email.header import Header

from .errors import InvalidArgumentError

_UTF8_Q = Charset("utf-8")
_UTF8_Q.header_encoding = QP


def fold_name(name: str) -> str:
    """Comparison key for a header name."""
    return name.strip().casefold()


def check_header_value(name: str, value: str) -> None:
    """Reject values that would start a new header line on the wire.

    Raises:
        InvalidArgumentError: If ``value`` contains CR or LF.
    """
    if "\r" in value or "\n" in value:
        raise InvalidArgumentError(f"Header \"{name}\" value must not contain CR or LF characters")


def encode_word(value: str, header_name: str = "") -> list[str]:
    """Word-encode a header value for the wire.

    ASCII values are returned unchanged as a single line. Non-ASCII values
    are encoded as RFC 2047 ``Q`` encoded words in UTF-8; when they do not
    fit on one line the extra lines start with a space (folding
    continuation), each returned as its own list item.

    Args:
        value: The decoded header value.
        header_name: Name of the header, used to size the first line.

    Returns:
        One or more header value lines.
    """
    if value.isascii():
        return [value]
    header = Header(value, charset=_UTF8_Q, header_name=header_name)
    return header.encode(linesep="\n").split("\n")


class HeaderMap:
    """Ordered, case-insensitive multimap of header names to values."""

    def __init__(self, headers: dict[str, str | Iterable[str]] | None = None):
        self._entries: dict[str, tuple[str, list[str]]] = {}
        if headers:
            for name, values in headers.items():
                self.set(name, values)

    @staticmethod
    def _as_list(values: str | Iterable[str]) -> list[str]:
        if isinstance(values, str):
            return [values]
        return [str(value) for value in values]

    def set(self, name: str, values: str | Iterable[str]) -> None:
        """Replace every value of ``name``."""
        key = fold_name(name)
        stored_name = self._entries[key][0] if key in self._entries else name
        self._entries[key] = (stored_name, self._as_list(values))

    def add(self, name: str, value: str) -> None:
        """Append ``value`` to the values of ``name``."""
        key = fold_name(name)
        if key in self._entries:
            self._entries[key][1].append(value)
        else:
            self._entries[key] = (name, [value])

    def get(self, name: str) -> list[str]:
        """Return a copy of the values of ``name`` (empty when absent)."""
        entry = self._entries.get(fold_name(name))
        return list(entry[1]) if entry else []

    def remove(self, name: str) -> None:
        """Drop ``name`` and all its values. Missing names are ignored."""
        self._entries.pop(fold_name(name), None)

    def clear(self) -> None:
        self._entries.clear()

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate ``(name, values)`` pairs in insertion order."""
        for name, values in self._entries.values():
            yield name, list(values)

    def to_dict(self) -> dict[str, list[str]]:
        return dict(self.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and fold_name(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"
