"""Sanitizing of rich-text job fields.

Job descriptions come from a WYSIWYG editor and are rendered on public
pages, so only a small set of formatting tags survives.
"""

from __future__ import annotations

import bleach

ALLOWED_TAGS: frozenset[str] = frozenset(
    {"p", "br", "strong", "em", "ul", "ol", "li", "h2", "h3"}
)

_EMPTY_MARKUP = {"", "<p></p>"}


def sanitize_rich_text(html: str | None) -> str | None:
    """Strip disallowed tags and every attribute.

    Returns None for empty input or input that sanitizes to nothing.
    """
    if not html:
        return None
    clean = bleach.clean(html, tags=ALLOWED_TAGS, attributes={}, strip=True).strip()
    return None if clean in _EMPTY_MARKUP else clean
