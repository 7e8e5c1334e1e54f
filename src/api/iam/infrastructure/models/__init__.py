"""SQLAlchemy ORM models for IAM bounded context."""

from iam.infrastructure.models.organization import (
    OrganizationModel,
    OrganizationUserModel,
)
from iam.infrastructure.models.portal import (
    CandidateOtpModel,
    ClientOtpModel,
    CompanyUserModel,
)
from iam.infrastructure.models.profile import LegacyProfileModel, UserProfileModel

__all__ = [
    "CandidateOtpModel",
    "ClientOtpModel",
    "CompanyUserModel",
    "LegacyProfileModel",
    "OrganizationModel",
    "OrganizationUserModel",
    "UserProfileModel",
]
