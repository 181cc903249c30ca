# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Delivery backends.

- Transport: abstract base with rendering and mass sending
- SmtpTransport: aiosmtplib delivery
- HttpRelayTransport: aiohttp POST to a relay API
- MemoryTransport: captures messages in memory
- SparkPostSmtpApi: SMTP with the X-MSYS-API header strategy
"""

from .base import HeaderStrategy, MassSendReport, SendFailure, Transport
from .http_relay import HttpRelayTransport
from .memory import MemoryTransport, SentMessage
from .smtp import SmtpTransport
from .sparkpost import MsysApiHeader, SparkPostSmtpApi

__all__ = [
    "HeaderStrategy",
    "HttpRelayTransport",
    "MassSendReport",
    "MemoryTransport",
    "MsysApiHeader",
    "SendFailure",
    "SentMessage",
    "SmtpTransport",
    "SparkPostSmtpApi",
    "Transport",
]
