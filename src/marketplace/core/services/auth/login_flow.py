"""OTP login, resend, verification and registration."""

from loguru import logger
from sqlmodel import Session

from src.marketplace.core.exceptions import (
    AccountSuspendedError,
    InputValidationError,
    InvalidCredentialsError,
    NotFoundError,
    OtpInvalidOrExpiredError,
)
from src.marketplace.core.models.auth import (
    IdentifierFields,
    LoginRequest,
    OtpChallenge,
    OtpPurpose,
    RegisterRequest,
    ResendOtpRequest,
    VerifyOtpRequest,
)
from src.marketplace.core.models.base import ApiModel
from src.marketplace.core.services.auth.session_issuer import AuthSession, AuthSessionIssuer
from src.marketplace.core.services.identity import (
    IdentifierResolver,
    LoginIdentifiers,
    PhoneMatcher,
    resolve_identifiers,
)
from src.marketplace.core.services.otp import IssuedOtp, OtpManager
from src.marketplace.core.services.phone import PhoneNormalizer
from src.marketplace.core.services.sms import SmsGateway
from src.marketplace.core.services.vendor import VendorEligibilityEvaluator
from src.marketplace.entities.core.user import (
    PublicUser,
    User,
    UserRepository,
    UserRole,
    sanitize_user,
)
from src.marketplace.runtime.context import get_config

MISSING_IDENTIFIER = "Please provide email, username, or phone number"


class VerificationResult(ApiModel):
    """Outcome of a registration-purpose verification; no session is issued."""

    user: PublicUser | None = None


class LoginFlowService:
    """Drives ``AwaitingIdentifier -> AwaitingOtp -> Authenticated``.

    Suspension is checked right after the identifier resolves, before any
    code is issued or verified.
    """

    def __init__(
        self,
        session: Session,
        sms_gateway: SmsGateway,
        phone_matcher: PhoneMatcher | None = None,
        session_issuer: AuthSessionIssuer | None = None,
    ) -> None:
        config = get_config()
        self._session = session
        self._users = UserRepository(session)
        self._resolver = IdentifierResolver(
            self._users, PhoneNormalizer.from_config(config.phone), phone_matcher
        )
        self._otp = OtpManager(session, sms_gateway)
        self._vendors = VendorEligibilityEvaluator(session)
        self._issuer = session_issuer or AuthSessionIssuer()

    def _identify(self, payload: IdentifierFields) -> tuple[LoginIdentifiers, User | None]:
        identifiers = resolve_identifiers(payload)
        if identifiers.is_empty:
            raise InputValidationError(MISSING_IDENTIFIER)
        return identifiers, self._resolver.find(identifiers)

    @staticmethod
    def _ensure_active(user: User) -> None:
        if user.is_suspended:
            logger.info("Rejected suspended user {}", user.id)
            raise AccountSuspendedError()

    def _challenge(self, verification_id: str, issued: IssuedOtp) -> OtpChallenge:
        config = get_config()
        expose = config.otp.expose_in_response and not config.app.is_production
        return OtpChallenge(
            verification_id=verification_id,
            expires_at=issued.expires_at,
            otp=issued.code if expose else None,
        )

    def login(self, request: LoginRequest) -> OtpChallenge | AuthSession | VerificationResult:
        """Issue a code when ``otp`` is absent, otherwise verify it."""
        if request.otp:
            return self._verify(request, request.otp, request.purpose)

        identifiers, user = self._identify(request)
        if user is None:
            raise InvalidCredentialsError()
        self._ensure_active(user)

        issued = self._otp.issue(user, identifiers.phone or user.phone_number)
        verification_id = (
            identifiers.phone
            or user.phone_number
            or identifiers.email
            or user.email
            or identifiers.username
            or user.username
        )
        logger.info("OTP issued for {} (purpose: {})", user.id, request.purpose)
        return self._challenge(verification_id, issued)

    def resend_otp(self, request: ResendOtpRequest) -> OtpChallenge:
        """Overwrite any outstanding code with a fresh one."""
        identifiers, user = self._identify(request)
        if user is None:
            raise NotFoundError("User not found")
        self._ensure_active(user)

        issued = self._otp.issue(user, identifiers.phone or user.phone_number)
        verification_id = (
            identifiers.phone
            or identifiers.email
            or user.phone_number
            or user.email
            or user.username
        )
        logger.info("OTP re-issued for {} (purpose: {})", user.id, request.purpose)
        return self._challenge(verification_id, issued)

    def verify_otp(self, request: VerifyOtpRequest) -> AuthSession | VerificationResult:
        if not request.otp:
            raise InputValidationError("OTP is required")
        result = self._verify(request, request.otp, request.purpose)
        if isinstance(result, VerificationResult):
            return VerificationResult()
        return result

    def _verify(
        self, payload: IdentifierFields, code: str, purpose: OtpPurpose
    ) -> AuthSession | VerificationResult:
        _, user = self._identify(payload)
        if user is None:
            raise OtpInvalidOrExpiredError()
        self._ensure_active(user)

        registration = purpose == "registration"
        if not registration:
            self._issuer.ensure_ready()
        user = self._otp.verify(user, code, mark_verified=registration)

        if registration:
            logger.info("Registration verified for user {}", user.id)
            return VerificationResult(user=sanitize_user(user))

        vendor_status = self._vendors.evaluate(user)
        logger.info("Login successful for user {}", user.id)
        return self._issuer.issue(user, vendor_status)

    def register(self, request: RegisterRequest) -> OtpChallenge:
        """Create an unverified account and send it a registration code."""
        role = UserRole(request.role)

        existing = self._users.find_first_by_any(
            email=request.email,
            username=request.username,
            phone_number=request.phone_number,
        )
        if existing is not None:
            raise InputValidationError(
                "User with this email, username or phone number already exists"
            )

        user = self._users.create(
            User(
                username=request.username,
                email=request.email,
                phone_number=request.phone_number,
                full_name=request.full_name,
                role=role,
            )
        )
        self._session.commit()
        logger.info("Registered user {} with role {}", user.id, role)

        issued = self._otp.issue(user)
        verification_id = user.phone_number or user.email or user.username
        return self._challenge(verification_id, issued)
