"""Shared API and session models."""

from .auth import (
    IdentifierFields,
    LoginRequest,
    OtpChallenge,
    OtpPurpose,
    RegisterRequest,
    ResendOtpRequest,
    VendorStatus,
    VerifyOtpRequest,
)
from .base import ApiModel, camel_config
from .session import SessionClaims

__all__ = [
    "ApiModel",
    "IdentifierFields",
    "LoginRequest",
    "OtpChallenge",
    "OtpPurpose",
    "RegisterRequest",
    "ResendOtpRequest",
    "SessionClaims",
    "VendorStatus",
    "VerifyOtpRequest",
    "camel_config",
]
