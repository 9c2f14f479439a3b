"""User domain entity."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from src.marketplace.core.models.base import ApiModel
from src.marketplace.entities.core._base import Entity


class UserRole(StrEnum):
    CUSTOMER = "customer"
    BAKERY_OWNER = "bakery_owner"
    RESTAURANT_OWNER = "restaurant_owner"
    ADMIN = "admin"

    @property
    def is_vendor_owner(self) -> bool:
        return self in (UserRole.BAKERY_OWNER, UserRole.RESTAURANT_OWNER)


class User(Entity):
    """User entity: the root aggregate for authentication state.

    ``otp`` and ``otp_expires_at`` are either both set or both ``None``.
    ``deleted_at`` doubles as the suspension marker.
    """

    username: str = Field(description="Unique username")
    email: str | None = Field(default=None, description="Unique email address")
    phone_number: str | None = Field(
        default=None, description="Phone number as entered, not canonical"
    )
    full_name: str | None = Field(default=None, description="Display name")
    role: UserRole = Field(default=UserRole.CUSTOMER, description="Account role")
    is_verified: bool = Field(default=False)
    password_hash: str | None = Field(default=None, repr=False)
    otp: str | None = Field(default=None, repr=False)
    otp_expires_at: datetime | None = Field(default=None)
    deleted_at: datetime | None = Field(default=None)

    @property
    def is_suspended(self) -> bool:
        return self.deleted_at is not None

    @property
    def has_pending_otp(self) -> bool:
        return self.otp is not None and self.otp_expires_at is not None


class PublicUser(ApiModel):
    """The only user shape returned by the API; it has no credential or OTP fields."""

    id: str
    username: str
    email: str | None = None
    phone_number: str | None = None
    full_name: str | None = None
    role: UserRole
    is_verified: bool
    created_at: datetime
    updated_at: datetime


def sanitize_user(user: User) -> PublicUser:
    """Strip credential and OTP fields from ``user``."""
    return PublicUser.model_validate(user, from_attributes=True)
