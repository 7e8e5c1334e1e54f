"""SQLAlchemy ORM models for the two platform profile tables.

`user_profiles` is the current source of platform roles. `profiles` is
the legacy table whose `is_master_admin` flag is still honored.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

MASTER_ADMIN_ROLE = "ultra_master_admin"
DEFAULT_PROFILE_ROLE = "user"


class UserProfileModel(Base, TimestampMixin):
    """ORM model for user_profiles table."""

    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    role: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_PROFILE_ROLE
    )


class LegacyProfileModel(Base, TimestampMixin):
    """ORM model for the legacy profiles table."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    is_master_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
