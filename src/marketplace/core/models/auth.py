"""Request and response bodies for the OTP authentication flow."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from src.marketplace.core.models.base import ApiModel

OtpPurpose = Literal["login", "registration"]


class IdentifierFields(ApiModel):
    """Every field a client may use to name an account.

    ``email_or_phone`` is disambiguated by the presence of ``@``.
    """

    email: str | None = None
    username: str | None = None
    phone_number: str | None = None
    phone: str | None = None
    email_or_phone: str | None = None


class LoginRequest(IdentifierFields):
    otp: str | None = None
    purpose: OtpPurpose = "login"


class ResendOtpRequest(IdentifierFields):
    purpose: OtpPurpose = "login"


class VerifyOtpRequest(IdentifierFields):
    otp: str | None = None
    purpose: OtpPurpose = "login"


class RegisterRequest(ApiModel):
    username: str = Field(min_length=3, max_length=150)
    email: str | None = Field(default=None, max_length=255)
    phone_number: str | None = None
    full_name: str | None = None
    role: Literal["customer", "bakery_owner", "restaurant_owner"] = "customer"


class OtpChallenge(ApiModel):
    """Handle returned after a code is issued; ``otp`` only outside production."""

    verification_id: str
    expires_at: datetime
    otp: str | None = None


class VendorStatus(ApiModel):
    vendor_type: Literal["bakery", "restaurant"]
    has_vendor: bool
    approved: bool
    pending: bool
