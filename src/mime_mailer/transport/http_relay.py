# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP relay transport built on aiohttp.

The rendered document is POSTed as JSON to a relay endpoint::

    {"from": "sender@example.com", "recipients": ["a@example.com"], "raw": "<MIME>"}
"""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Iterable
from typing import Any

import aiohttp

from ..config import HttpRelayConfig
from ..encoder import MessageEncoder
from ..errors import TransportError
from ..logger import get_logger
from ..message import Message
from .base import HeaderStrategy, Transport

logger = get_logger(__name__)


class HttpRelayTransport(Transport):
    """Hand messages to an HTTP relay API."""

    exclude_headers = ("Bcc",)

    def __init__(
        self,
        config: HttpRelayConfig,
        encoder: MessageEncoder | None = None,
        strategies: Iterable[HeaderStrategy] = (),
        line_feed: str | None = None,
    ):
        super().__init__(encoder=encoder, strategies=strategies, line_feed=line_feed)
        if not config.url:
            raise TransportError("HTTP relay transport requires a url")
        self.config = config

    def _auth_headers(self) -> dict[str, str]:
        if self.config.token:
            return {"Authorization": f"Bearer {self.config.token}"}
        if self.config.user:
            credentials = base64.b64encode(f"{self.config.user}:{self.config.password or ''}".encode()).decode()
            return {"Authorization": f"Basic {credentials}"}
        return {}

    def payload(self, message: Message) -> dict[str, Any]:
        """JSON body posted to the relay."""
        return {
            "from": message.from_addr.email if message.from_addr else None,
            "recipients": [address.email for address in message.recipients],
            "raw": self.render(message),
        }

    async def send(self, message: Message) -> Any:
        """POST ``message`` to the relay.

        Returns:
            The decoded JSON response, or the response text when the relay
            does not answer with JSON.

        Raises:
            TransportError: On connection errors, timeouts and non-2xx replies.
        """
        if not message.recipients:
            raise TransportError("Cannot send a message without recipients")

        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.config.url, json=self.payload(message), headers=self._auth_headers()
                ) as response:
                    response.raise_for_status()
                    if response.content_type == "application/json":
                        result = await response.json()
                    else:
                        result = await response.text()
        except aiohttp.ClientResponseError as e:
            raise TransportError(
                f"HTTP relay rejected message: {e.status} {e.message}",
                {"url": self.config.url, "code": e.status},
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"HTTP relay request failed: {e}", {"url": self.config.url}) from e

        logger.info(f"Message {message.subject!r} relayed to {self.config.url}")
        return result
