"""Public job URLs.

Public job pages live at `/<tenant>/public/vaga/<slug>--<job_id>`. The
slug is cosmetic; only the id after the last `--` is used to find the job.
"""

from __future__ import annotations

import re

from ulid import ULID

from shared_kernel.slugs import to_slug

_LEGACY_PREFIXES = ("vaga-", "vaga/")
_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def generate_job_slug(title: str) -> str:
    return to_slug(title) or "vaga"


def generate_public_job_url(tenant_slug: str, job_id: str, title: str) -> str:
    return f"/{tenant_slug}/public/vaga/{generate_job_slug(title)}--{job_id}"


def _is_job_id(value: str) -> bool:
    if _UUID_PATTERN.match(value):
        return True
    try:
        ULID.from_str(value)
    except ValueError:
        return False
    return True


def parse_public_job_id(segment: str) -> str | None:
    """Extract the job id from a public URL segment.

    Accepts `<slug>--<id>` as well as the older `vaga-` and `vaga/`
    prefixed forms. Returns None when no well-formed id is present.
    """
    for prefix in _LEGACY_PREFIXES:
        if segment.startswith(prefix):
            segment = segment[len(prefix):]
            break

    _, delimiter, job_id = segment.rpartition("--")
    if not delimiter or not _is_job_id(job_id):
        return None
    return job_id
