# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for mime-mailer tests."""

import pytest

from mime_mailer import Address, Attachment, Message

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 2
PDF_BYTES = b"%PDF-1.4\n" + b"x" * 500


@pytest.fixture
def sender():
    return Address("noreply@example.com", "Example Shop")


@pytest.fixture
def message(sender):
    """Message with sender, one recipient and a subject, no body."""
    return (
        Message()
        .set_from(sender)
        .set_to([Address("john@example.com", "John Doe")])
        .set_subject("Your order")
    )


@pytest.fixture
def logo():
    return Attachment("logo.png", PNG_BYTES, id="logo@example")


@pytest.fixture
def invoice():
    return Attachment("invoice.pdf", PDF_BYTES)
