"""Domain probes for recruiting application services."""

from recruiting.application.observability.job_service_probe import (
    DefaultJobServiceProbe,
    JobServiceProbe,
)
from recruiting.application.observability.member_service_probe import (
    DefaultMemberServiceProbe,
    MemberServiceProbe,
)

__all__ = [
    "DefaultJobServiceProbe",
    "DefaultMemberServiceProbe",
    "JobServiceProbe",
    "MemberServiceProbe",
]
