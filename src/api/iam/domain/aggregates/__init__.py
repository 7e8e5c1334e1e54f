"""IAM aggregates."""

from iam.domain.aggregates.one_time_passcode import OneTimePasscode
from iam.domain.aggregates.organization import Organization

__all__ = [
    "OneTimePasscode",
    "Organization",
]
