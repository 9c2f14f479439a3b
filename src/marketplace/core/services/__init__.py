"""Core services exports."""

from .auth import AuthSession, AuthSessionIssuer, LoginFlowService, VerificationResult
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .identity import (
    IdentifierResolver,
    LoginIdentifiers,
    PhoneMatcher,
    ScanPhoneMatcher,
    resolve_identifiers,
)
from .jwt import JwtGeneratorService, JwtVerificationService
from .notifications import NotificationPage, NotificationService
from .orders import OrderCreationService, OrderLifecycleEngine, OrderQueryService
from .otp import IssuedOtp, OtpManager
from .phone import PhoneNormalizer, normalize_phone
from .sms import ConsoleSmsGateway, SmsGateway, SmsResult, TwilioSmsGateway, build_sms_gateway
from .vendor import (
    VendorEligibilityEvaluator,
    VendorModerationService,
    resolve_vendor,
)

__all__ = [
    # Auth
    "AuthSession",
    "AuthSessionIssuer",
    "LoginFlowService",
    "VerificationResult",
    # Database
    "DbManageService",
    "DbSessionService",
    # Identity
    "IdentifierResolver",
    "LoginIdentifiers",
    "PhoneMatcher",
    "ScanPhoneMatcher",
    "resolve_identifiers",
    "PhoneNormalizer",
    "normalize_phone",
    # OTP and SMS
    "IssuedOtp",
    "OtpManager",
    "ConsoleSmsGateway",
    "SmsGateway",
    "SmsResult",
    "TwilioSmsGateway",
    "build_sms_gateway",
    # JWT
    "JwtGeneratorService",
    "JwtVerificationService",
    # Orders and notifications
    "NotificationPage",
    "NotificationService",
    "OrderCreationService",
    "OrderLifecycleEngine",
    "OrderQueryService",
    # Vendors
    "VendorEligibilityEvaluator",
    "VendorModerationService",
    "resolve_vendor",
]
