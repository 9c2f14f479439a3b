"""FastAPI dependency providers."""

from collections.abc import Callable, Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.core.exceptions import (
    AccountSuspendedError,
    NotAuthenticatedError,
    PermissionDeniedError,
)
from src.marketplace.core.models import SessionClaims
from src.marketplace.core.services import (
    AuthSessionIssuer,
    JwtVerificationService,
    LoginFlowService,
    NotificationService,
    OrderCreationService,
    OrderLifecycleEngine,
    OrderQueryService,
    SmsGateway,
    VendorModerationService,
)
from src.marketplace.entities.core.user import User, UserRepository, UserRole


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """One session per request, closed when the response is sent."""
    session = deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_sms_gateway(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> SmsGateway:
    return deps.sms_gateway


def get_jwt_verify_service(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> JwtVerificationService:
    return deps.jwt_verify_service


def get_session_issuer(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> AuthSessionIssuer:
    return AuthSessionIssuer(deps.jwt_generation_service)


def get_current_claims(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> SessionClaims:
    """Verify the ``Authorization: Bearer`` session token."""
    auth_header = request.headers.get("authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise NotAuthenticatedError("Missing Bearer token")
    return jwt_verify.verify_session_token(token.strip())


def get_current_user(
    claims: SessionClaims = Depends(get_current_claims),
    db: Session = Depends(get_db_session),
) -> User:
    """Load the token's user; suspension takes effect on the next request."""
    user = UserRepository(db).get(claims.user_id)
    if user is None:
        raise NotAuthenticatedError("User not found")
    if user.is_suspended:
        raise AccountSuspendedError()
    return user


def require_role(*roles: str) -> Callable[[User], User]:
    """Dependency factory gating an endpoint on the caller's current role."""
    allowed = {UserRole(role) for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise PermissionDeniedError()
        return user

    return dependency


def get_login_flow(
    db: Session = Depends(get_db_session),
    sms_gateway: SmsGateway = Depends(get_sms_gateway),
    issuer: AuthSessionIssuer = Depends(get_session_issuer),
) -> LoginFlowService:
    return LoginFlowService(db, sms_gateway, session_issuer=issuer)


def get_order_creation(db: Session = Depends(get_db_session)) -> OrderCreationService:
    return OrderCreationService(db)


def get_order_lifecycle(db: Session = Depends(get_db_session)) -> OrderLifecycleEngine:
    return OrderLifecycleEngine(db)


def get_order_queries(db: Session = Depends(get_db_session)) -> OrderQueryService:
    return OrderQueryService(db)


def get_notification_service(db: Session = Depends(get_db_session)) -> NotificationService:
    return NotificationService(db)


def get_vendor_moderation(db: Session = Depends(get_db_session)) -> VendorModerationService:
    return VendorModerationService(db)
