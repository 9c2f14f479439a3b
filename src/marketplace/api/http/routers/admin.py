"""Administrator endpoints for vendor moderation and account suspension."""

from fastapi import APIRouter, Body, Depends

from src.marketplace.api.http.deps import get_vendor_moderation, require_role
from src.marketplace.core.models.base import ApiModel
from src.marketplace.core.services import VendorModerationService
from src.marketplace.core.services.vendor import ModerationResult, ResolvedVendor
from src.marketplace.entities.core.user import PublicUser

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_role("admin"))]
)


class RejectionBody(ApiModel):
    reason: str | None = None


@router.get("/vendors/{vendor_id}", response_model=ResolvedVendor)
def get_vendor(
    vendor_id: str, moderation: VendorModerationService = Depends(get_vendor_moderation)
):
    return moderation.get(vendor_id)


@router.put("/vendors/{vendor_id}/approve", response_model=ModerationResult)
def approve_vendor(
    vendor_id: str, moderation: VendorModerationService = Depends(get_vendor_moderation)
) -> ModerationResult:
    return moderation.approve(vendor_id)


@router.put("/vendors/{vendor_id}/reject", response_model=ModerationResult)
def reject_vendor(
    vendor_id: str,
    body: RejectionBody | None = Body(default=None),
    moderation: VendorModerationService = Depends(get_vendor_moderation),
) -> ModerationResult:
    return moderation.reject(vendor_id, body.reason if body else None)


@router.put("/users/{user_id}/suspend", response_model=PublicUser)
def suspend_user(
    user_id: str, moderation: VendorModerationService = Depends(get_vendor_moderation)
) -> PublicUser:
    return moderation.suspend_user(user_id)


@router.put("/users/{user_id}/activate", response_model=PublicUser)
def activate_user(
    user_id: str, moderation: VendorModerationService = Depends(get_vendor_moderation)
) -> PublicUser:
    return moderation.activate_user(user_id)
