# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Random MIME boundary tokens scoped to one encode pass."""

from __future__ import annotations

import secrets

from .config import EncoderConfig
from .errors import InvalidArgumentError

MIXED = "mixed"
ALTERNATIVE = "alternative"
RELATED = "related"

BOUNDARY_KINDS = (MIXED, ALTERNATIVE, RELATED)


class BoundaryGenerator:
    """Generate one boundary token per multipart kind and cache it.

    The first request for a kind draws a new token; later requests for the
    same kind return the cached value so that opening and closing delimiters
    match. Create a new generator (or call :meth:`reset`) for every message.
    """

    def __init__(self, config: EncoderConfig | None = None):
        self.config = config or EncoderConfig()
        if self.config.boundary_length < 1:
            raise InvalidArgumentError("boundary_length must be a positive integer")
        if not self.config.boundary_alphabet:
            raise InvalidArgumentError("boundary_alphabet must not be empty")
        self._cache: dict[str, str] = {}

    def _generate(self) -> str:
        alphabet = self.config.boundary_alphabet
        token = "".join(secrets.choice(alphabet) for _ in range(self.config.boundary_length))
        if self.config.boundary_prefix:
            return f"{self.config.boundary_prefix}-{token}"
        return token

    def boundary(self, kind: str) -> str:
        """Return the boundary token for ``kind`` (mixed, alternative or related)."""
        if kind not in BOUNDARY_KINDS:
            raise InvalidArgumentError(
                f"Unknown boundary kind '{kind}', expected one of: {', '.join(BOUNDARY_KINDS)}"
            )
        if kind not in self._cache:
            self._cache[kind] = self._generate()
        return self._cache[kind]

    def reset(self) -> None:
        """Forget every cached token."""
        self._cache.clear()
