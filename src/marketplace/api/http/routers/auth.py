from fastapi import APIRouter, Depends, status

from src.marketplace.api.http.deps import get_current_user, get_login_flow
from src.marketplace.api.http.middleware.limiter import otp_rate_limit
from src.marketplace.core.models import (
    LoginRequest,
    OtpChallenge,
    RegisterRequest,
    ResendOtpRequest,
    VerifyOtpRequest,
)
from src.marketplace.core.models.base import ApiModel
from src.marketplace.core.services import LoginFlowService

router = APIRouter(prefix="/auth", tags=["auth"])


def _render(result: ApiModel) -> dict:
    """Serialize one of several response shapes; absent fields are omitted."""
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=OtpChallenge,
    response_model_exclude_none=True,
    dependencies=[Depends(otp_rate_limit())],
)
def register(
    body: RegisterRequest, flow: LoginFlowService = Depends(get_login_flow)
) -> OtpChallenge:
    return flow.register(body)


@router.post("/login", dependencies=[Depends(otp_rate_limit())])
def login(body: LoginRequest, flow: LoginFlowService = Depends(get_login_flow)) -> dict:
    """Send a code when ``otp`` is absent, otherwise verify it and sign in."""
    return _render(flow.login(body))


@router.post(
    "/resend-otp",
    response_model=OtpChallenge,
    response_model_exclude_none=True,
    dependencies=[Depends(otp_rate_limit())],
)
def resend_otp(
    body: ResendOtpRequest, flow: LoginFlowService = Depends(get_login_flow)
) -> OtpChallenge:
    return flow.resend_otp(body)


@router.post("/verify-otp", dependencies=[Depends(otp_rate_limit())])
def verify_otp(
    body: VerifyOtpRequest, flow: LoginFlowService = Depends(get_login_flow)
) -> dict:
    """Registration codes yield an empty body; login codes yield a session."""
    return _render(flow.verify_otp(body))


@router.post("/logout", dependencies=[Depends(get_current_user)])
def logout() -> dict:
    # Session tokens are stateless; the client discards its copy.
    return {"message": "Logged out successfully"}
