# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""In-memory transport for tests and dry runs."""

from __future__ import annotations

from dataclasses import dataclass

from ..logger import get_logger
from ..message import Message
from .base import Transport

logger = get_logger(__name__)


@dataclass
class SentMessage:
    """A message captured by :class:`MemoryTransport`."""

    sender: str | None
    recipients: list[str]
    raw: str


class MemoryTransport(Transport):
    """Keep rendered messages in :attr:`outbox` instead of delivering them."""

    exclude_headers = ("Bcc",)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.outbox: list[SentMessage] = []

    async def send(self, message: Message) -> SentMessage:
        sent = SentMessage(
            sender=message.from_addr.email if message.from_addr else None,
            recipients=[address.email for address in message.recipients],
            raw=self.render(message),
        )
        self.outbox.append(sent)
        logger.debug(f"Captured message {message.subject!r} for {', '.join(sent.recipients)}")
        return sent
