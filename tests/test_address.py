# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for Address rendering and parsing."""

from email.header import decode_header, make_header

from mime_mailer import Address


class TestAddress:
    """Tests for Address."""

    def test_plain_email(self):
        assert str(Address("john@example.com")) == "john@example.com"

    def test_with_name(self):
        assert str(Address("john@example.com", "John Doe")) == "John Doe <john@example.com>"

    def test_name_with_special_characters_is_quoted(self):
        """Names with specials are quoted."""
        assert str(Address("j@example.com", "Doe, John")) == '"Doe, John" <j@example.com>'

    def test_non_ascii_name_is_word_encoded(self):
        """Non-ASCII display names become encoded words."""
        rendered = str(Address("jose@example.com", "José"))
        assert rendered.isascii()
        name_part = rendered.rsplit(" <", 1)[0]
        assert str(make_header(decode_header(name_part))) == "José"

    def test_parse_name_and_email(self):
        address = Address.parse("John Doe <john@example.com>")
        assert address == Address("john@example.com", "John Doe")

    def test_parse_bare_email(self):
        assert Address.parse(" john@example.com ") == Address("john@example.com")
