# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP transport built on aiosmtplib.

One connection is opened per :meth:`SmtpTransport.send` call. TLS behavior
follows the port:

- port 465 with ``use_tls``: implicit TLS
- other ports with ``use_tls``: STARTTLS
- ``use_tls=False``: plain SMTP

The envelope sender is the message ``From`` address and the envelope
recipients are ``To``, ``Cc`` and ``Bcc``. The ``Bcc`` header itself is
never written to the payload.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import aiosmtplib

from ..config import SmtpConfig
from ..encoder import MessageEncoder
from ..errors import TransportError
from ..logger import get_logger
from ..message import Message
from .base import HeaderStrategy, Transport

logger = get_logger(__name__)


class SmtpTransport(Transport):
    """Deliver messages to an SMTP server."""

    exclude_headers = ("Bcc",)

    def __init__(
        self,
        config: SmtpConfig | None = None,
        encoder: MessageEncoder | None = None,
        strategies: Iterable[HeaderStrategy] = (),
        line_feed: str | None = None,
    ):
        super().__init__(encoder=encoder, strategies=strategies, line_feed=line_feed)
        self.config = config or SmtpConfig()

    def _client(self) -> aiosmtplib.SMTP:
        config = self.config
        if config.use_tls and config.port == 465:
            return aiosmtplib.SMTP(
                hostname=config.host, port=config.port, start_tls=False, use_tls=True, timeout=config.timeout
            )
        if config.use_tls:
            return aiosmtplib.SMTP(
                hostname=config.host, port=config.port, start_tls=True, use_tls=False, timeout=config.timeout
            )
        return aiosmtplib.SMTP(
            hostname=config.host, port=config.port, start_tls=False, use_tls=False, timeout=config.timeout
        )

    async def _connect(self) -> aiosmtplib.SMTP:
        """Open a connection and authenticate when credentials are configured."""
        smtp = self._client()

        async def _do_connect():
            await smtp.connect()
            if self.config.user and self.config.password:
                await smtp.login(self.config.user, self.config.password)

        await asyncio.wait_for(_do_connect(), timeout=self.config.timeout)
        return smtp

    async def send(self, message: Message) -> tuple[dict, str]:
        """Send ``message`` over SMTP.

        Returns:
            The aiosmtplib ``(refused_recipients, server_response)`` tuple.

        Raises:
            TransportError: If the message has no sender or recipients, or the
                server connection, authentication or delivery fails.
        """
        if message.from_addr is None:
            raise TransportError("Cannot send a message without a From address")
        recipients = [address.email for address in message.recipients]
        if not recipients:
            raise TransportError("Cannot send a message without recipients")

        payload = self.render_bytes(message)
        details = {"host": self.config.host, "recipients": recipients}

        try:
            smtp = await self._connect()
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            raise TransportError(f"SMTP connection to {self.config.host}:{self.config.port} failed: {e}", details) from e

        try:
            refused, response = await asyncio.wait_for(
                smtp.sendmail(message.from_addr.email, recipients, payload),
                timeout=self.config.timeout,
            )
        except aiosmtplib.SMTPResponseException as e:
            details["code"] = e.code
            raise TransportError(f"SMTP server rejected message: {e.code} {e.message}", details) from e
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            raise TransportError(f"SMTP delivery failed: {e}", details) from e
        finally:
            try:
                await smtp.quit()
            except (aiosmtplib.SMTPException, OSError):
                logger.debug(f"SMTP quit failed for {self.config.host}", exc_info=True)

        if refused:
            logger.warning(f"SMTP server refused recipients: {', '.join(refused)}")
        logger.info(f"Message {message.subject!r} sent to {len(recipients)} recipient(s) via {self.config.host}")
        return refused, response
