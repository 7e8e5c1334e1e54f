"""URL slug derivation shared by organizations and jobs."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

ORGANIZATION_SLUG_MAX_LENGTH = 50
DEFAULT_SLUG_MAX_LENGTH = 60


def to_slug(text: str, max_length: int = DEFAULT_SLUG_MAX_LENGTH) -> str:
    """Derive a URL-safe slug from display text.

    Accents are stripped ("Gestão de Vagas" -> "gestao-de-vagas"), every
    run of non-alphanumerics becomes one hyphen, and the result is cut to
    `max_length` without leaving a trailing hyphen.
    """
    normalized = unicodedata.normalize("NFD", text.strip().lower())
    ascii_only = "".join(c for c in normalized if not unicodedata.combining(c))
    slug = _NON_ALNUM.sub("-", ascii_only).strip("-")
    return slug[:max_length].rstrip("-")


def is_valid_slug(value: str) -> bool:
    """Whether `value` is already a well-formed slug."""
    return bool(_SLUG_PATTERN.match(value))
