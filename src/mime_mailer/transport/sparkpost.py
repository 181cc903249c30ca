# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SparkPost SMTP API injection.

SparkPost reads per-message options (campaign id, metadata, tracking flags)
from a JSON ``X-MSYS-API`` header. :class:`MsysApiHeader` merges the JSON
objects found in the message's own ``X-MSYS-API`` headers with static
transport options and emits a single header in their place.

See https://developers.sparkpost.com/api/smtp-api.html
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from ..config import SmtpConfig
from ..encoder import MessageEncoder
from ..logger import get_logger
from ..message import Message
from .base import HeaderStrategy
from .smtp import SmtpTransport

logger = get_logger(__name__)

MSYS_API_HEADER = "X-MSYS-API"
SPARKPOST_HOST = "smtp.sparkpostmail.com"
SPARKPOST_PORT = 587
SPARKPOST_USER = "SMTP_Injection"


class MsysApiHeader(HeaderStrategy):
    """Build the ``X-MSYS-API`` header from message headers and options.

    Args:
        options: Static options. They win over values from the message.
    """

    exclude = (MSYS_API_HEADER,)

    def __init__(self, options: dict[str, Any] | None = None):
        self.options = dict(options or {})

    def merged_options(self, message: Message) -> dict[str, Any]:
        """Options from every message header value, then the static ones."""
        merged: dict[str, Any] = {}
        for value in message.get_header(MSYS_API_HEADER):
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError as e:
                logger.warning(f"Ignoring invalid JSON in {MSYS_API_HEADER} header: {e}")
                continue
            if not isinstance(decoded, dict):
                logger.warning(f"Ignoring non-object {MSYS_API_HEADER} header value: {value!r}")
                continue
            merged.update(decoded)
        merged.update(self.options)
        return merged

    def extra_lines(self, message: Message) -> list[str]:
        merged = self.merged_options(message)
        if not merged:
            return []
        return [f"{MSYS_API_HEADER}: {json.dumps(merged, separators=(',', ':'))}"]


class SparkPostSmtpApi(SmtpTransport):
    """SMTP transport preconfigured for SparkPost injection.

    Args:
        api_key: SparkPost API key, used as the SMTP password.
        options: Static ``X-MSYS-API`` options.
        smtp: SMTP settings overriding the SparkPost defaults.
    """

    def __init__(
        self,
        api_key: str | None = None,
        options: dict[str, Any] | None = None,
        smtp: SmtpConfig | None = None,
        encoder: MessageEncoder | None = None,
        strategies: Iterable[HeaderStrategy] = (),
    ):
        config = smtp or SmtpConfig(host=SPARKPOST_HOST, port=SPARKPOST_PORT, user=SPARKPOST_USER)
        if api_key is not None:
            config = replace(config, password=api_key)
        self.msys_api = MsysApiHeader(options)
        super().__init__(config, encoder=encoder, strategies=[self.msys_api, *strategies])
