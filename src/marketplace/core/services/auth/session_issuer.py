"""Mint session tokens for verified users."""

from src.marketplace.core.models.auth import VendorStatus
from src.marketplace.core.models.base import ApiModel
from src.marketplace.core.services.jwt import JwtGeneratorService
from src.marketplace.entities.core.user import PublicUser, User, sanitize_user


class AuthSession(ApiModel):
    token: str
    user: PublicUser
    vendor_status: VendorStatus | None = None


class AuthSessionIssuer:
    """Signs a session token and pairs it with the redacted user."""

    def __init__(self, jwt_generator: JwtGeneratorService | None = None) -> None:
        self._jwt_generator = jwt_generator or JwtGeneratorService()

    def ensure_ready(self) -> None:
        """Fail before any credential is consumed if tokens cannot be signed."""
        self._jwt_generator.require_signing_secret()

    def issue(self, user: User, vendor_status: VendorStatus | None = None) -> AuthSession:
        token = self._jwt_generator.generate_session_token(user.id, user.role.value)
        return AuthSession(token=token, user=sanitize_user(user), vendor_status=vendor_status)
