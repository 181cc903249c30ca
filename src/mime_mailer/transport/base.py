# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Transport interface and header strategies.

A transport renders a :class:`~mime_mailer.message.Message` with a
:class:`~mime_mailer.encoder.MessageEncoder` and delivers the result.
Vendor-specific headers are contributed by :class:`HeaderStrategy`
objects which can hide message headers from the encoder output and append
lines of their own.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from ..address import Address
from ..encoder import MessageEncoder
from ..errors import TransportError
from ..logger import get_logger
from ..message import Message

logger = get_logger(__name__)

Recipient = Union[Address, Sequence[Address]]
MassSendCallback = Callable[[Recipient, int], Union[None, Awaitable[None]]]


class HeaderStrategy:
    """Adjust the header block produced by the encoder.

    Attributes:
        exclude: Message header names the encoder must not emit.
    """

    exclude: tuple[str, ...] = ()

    def extra_lines(self, message: Message) -> list[str]:
        """Header lines appended after the encoder headers."""
        return []


@dataclass
class SendFailure:
    """A recipient whose send raised :class:`TransportError`."""

    recipient: Recipient
    index: int
    error: TransportError


@dataclass
class MassSendReport:
    """Outcome of :meth:`Transport.mass_send`.

    Attributes:
        results: Return value of each successful send, in order.
        failures: One entry per failed recipient.
    """

    results: list[Any] = field(default_factory=list)
    failures: list[SendFailure] = field(default_factory=list)

    @property
    def sent(self) -> int:
        return len(self.results)

    @property
    def ok(self) -> bool:
        return not self.failures


class Transport(ABC):
    """Base class for every delivery backend.

    Subclasses implement :meth:`send`. Rendering and mass sending are shared.

    Attributes:
        encoder: Encoder used to render messages.
        strategies: Header strategies applied on every render.
        line_feed: Line terminator of the rendered document.
        exclude_headers: Headers this transport never puts on the wire.
    """

    exclude_headers: tuple[str, ...] = ()

    def __init__(
        self,
        encoder: MessageEncoder | None = None,
        strategies: Iterable[HeaderStrategy] = (),
        line_feed: str | None = None,
    ):
        self.encoder = encoder or MessageEncoder()
        self.strategies = list(strategies)
        self.line_feed = line_feed or self.encoder.config.line_feed

    def excluded_headers(self) -> list[str]:
        """Header names hidden from the encoder output."""
        names = list(self.exclude_headers)
        for strategy in self.strategies:
            names.extend(strategy.exclude)
        return names

    def render_lines(self, message: Message) -> list[str]:
        """Header lines, strategy lines and body lines of ``message``."""
        lines = self.encoder.headers(message, self.excluded_headers())
        for strategy in self.strategies:
            lines.extend(strategy.extra_lines(message))
        lines.extend(self.encoder.body(message))
        return lines

    def render(self, message: Message) -> str:
        """The MIME document for ``message`` as sent by this transport."""
        return self.line_feed.join(self.render_lines(message))

    def render_bytes(self, message: Message) -> bytes:
        """:meth:`render` encoded as UTF-8 bytes for the wire."""
        return self.render(message).encode("utf-8")

    @abstractmethod
    async def send(self, message: Message) -> Any:
        """Deliver ``message``.

        Returns:
            A transport-specific delivery result.

        Raises:
            TransportError: If the message could not be delivered.
        """

    async def mass_send(
        self,
        message: Message,
        recipients: Iterable[Recipient],
        callback: MassSendCallback | None = None,
    ) -> MassSendReport:
        """Send ``message`` once per recipient.

        For each entry the recipients of ``message`` are reset and ``To`` is
        set to that entry (a list or tuple entry becomes a group of ``To``
        addresses sharing one send). ``callback(recipient, index)`` runs
        after each attempt and may be a coroutine function. A failing send is
        logged and recorded in the report, the loop continues. The message
        recipients are reset when the loop ends.

        Args:
            message: Template message, mutated during the loop.
            recipients: Addresses or address groups.
            callback: Optional progress callback.

        Returns:
            Results and failures of every send.
        """
        report = MassSendReport()
        try:
            for index, recipient in enumerate(recipients):
                message.reset_recipients()
                if isinstance(recipient, (list, tuple)):
                    message.set_to(recipient)
                else:
                    message.set_to([recipient])

                try:
                    report.results.append(await self.send(message))
                except TransportError as e:
                    logger.warning(f"Mass send to {recipient} (#{index}) failed: {e}")
                    report.failures.append(SendFailure(recipient=recipient, index=index, error=e))

                if callback is not None:
                    result = callback(recipient, index)
                    if inspect.isawaitable(result):
                        await result
        finally:
            message.reset_recipients()

        logger.info(f"Mass send finished: {report.sent} sent, {len(report.failures)} failed")
        return report
