# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTML whitespace minification applied before quoted-printable encoding."""

from __future__ import annotations

import re

# Elements whose content is copied verbatim, closing tag included.
_PROTECTED_RE = re.compile(
    r"<(pre|textarea|script)\b.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)

# One of [\t\r\n\f\v] plus any following whitespace, or two or more
# whitespace characters.
_WHITESPACE_RE = re.compile(r"[^\S ]\s*|\s{2,}")


def minify_html(html: str) -> str:
    """Collapse structural whitespace of ``html`` to single spaces.

    Content of ``<textarea>``, ``<pre>`` and ``<script>`` elements is left
    untouched. An element that is never closed is not protected.

    Example:
        >>> minify_html("<p>\\n  Hello\\n</p><pre>a\\n  b</pre>")
        '<p> Hello </p><pre>a\\n  b</pre>'
    """
    pieces: list[str] = []
    position = 0
    for match in _PROTECTED_RE.finditer(html):
        pieces.append(_WHITESPACE_RE.sub(" ", html[position:match.start()]))
        pieces.append(match.group(0))
        position = match.end()
    pieces.append(_WHITESPACE_RE.sub(" ", html[position:]))
    return "".join(pieces)
