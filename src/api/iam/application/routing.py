"""Request path classification for the access gate.

Classification is decided from the path alone and is order sensitive:

1. candidate portal prefix
2. client portal prefix
3. public prefixes (including public pages nested under a tenant slug)
4. first segment: reserved words pass through; "/" needs only a platform
   session; anything else is a tenant slug

Portal prefixes are checked before public prefixes and public prefixes
before slug extraction, so a tenant slug can never shadow a reserved or
public path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from infrastructure.settings import RoutingSettings


class PathKind(StrEnum):
    CANDIDATE_PORTAL = "candidate_portal"
    CLIENT_PORTAL = "client_portal"
    PUBLIC = "public"
    RESERVED = "reserved"
    AUTHENTICATED = "authenticated"
    TENANT = "tenant"


@dataclass(frozen=True)
class PathClassification:
    """Result of classifying a request path.

    `tenant_slug` is set only for `PathKind.TENANT`.
    """

    kind: PathKind
    tenant_slug: str | None = None


def _has_prefix(path: str, prefix: str) -> bool:
    # "/s/" style prefixes match raw; word prefixes match whole segments
    if prefix.endswith("/"):
        return path.startswith(prefix)
    return path == prefix or path.startswith(prefix + "/")


def classify_path(path: str, settings: RoutingSettings) -> PathClassification:
    """Classify `path` into one of the access gate flows."""
    if _has_prefix(path, settings.candidate_portal_prefix):
        return PathClassification(PathKind.CANDIDATE_PORTAL)
    if _has_prefix(path, settings.client_portal_prefix):
        return PathClassification(PathKind.CLIENT_PORTAL)
    if any(_has_prefix(path, prefix) for prefix in settings.public_prefixes):
        return PathClassification(PathKind.PUBLIC)

    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return PathClassification(PathKind.AUTHENTICATED)

    first = segments[0]
    if first in settings.reserved_segments:
        return PathClassification(PathKind.RESERVED)
    if len(segments) > 1 and segments[1] in settings.tenant_public_segments:
        return PathClassification(PathKind.PUBLIC)
    return PathClassification(PathKind.TENANT, tenant_slug=first)
