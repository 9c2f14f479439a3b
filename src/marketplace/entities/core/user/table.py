"""User database table model."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable, SoftDeleteMixin
from src.marketplace.entities.core.user.entity import UserRole


class UserTable(EntityTable, SoftDeleteMixin, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    username: str = Field(sa_column=sa.Column(sa.String(150), unique=True, nullable=False))
    email: str | None = Field(
        default=None, sa_column=sa.Column(sa.String(255), unique=True, nullable=True)
    )
    phone_number: str | None = Field(default=None, index=True)
    full_name: str | None = None
    role: UserRole = Field(
        default=UserRole.CUSTOMER,
        sa_column=sa.Column(sa.String(32), nullable=False, default=UserRole.CUSTOMER.value),
    )
    is_verified: bool = Field(default=False)
    password_hash: str | None = None
    otp: str | None = Field(default=None, max_length=16)
    otp_expires_at: datetime | None = Field(
        default=None, sa_type=sa.DateTime(timezone=True)
    )
