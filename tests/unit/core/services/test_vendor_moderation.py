import pytest

from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.core.services import VendorModerationService, resolve_vendor
from src.marketplace.core.services.vendor import (
    BakeryVendor,
    PendingOwnerAccount,
    RestaurantVendor,
)
from src.marketplace.entities import (
    UserRepository,
    UserRole,
    VendorApprovalStatus,
    VendorKind,
    VendorRepository,
)
from src.marketplace.entities.core._base import utc_now

PENDING = VendorApprovalStatus.PENDING_APPROVAL


class TestResolveVendor:
    def test_bakery_first(self, session, bakery, bakery_owner):
        resolved = resolve_vendor(session, bakery.id)
        assert isinstance(resolved, BakeryVendor)
        assert resolved.owner.id == bakery_owner.id

    def test_restaurant(self, session, restaurant):
        assert isinstance(resolve_vendor(session, restaurant.id), RestaurantVendor)

    def test_owner_account_by_user_id(self, session, make_vendor, bakery_owner):
        make_vendor(bakery_owner, status=PENDING)
        resolved = resolve_vendor(session, bakery_owner.id)

        assert isinstance(resolved, PendingOwnerAccount)
        assert resolved.vendor_kind == VendorKind.BAKERY
        assert len(resolved.pending_vendors) == 1

    def test_soft_deleted_vendor_still_resolves(self, session, make_vendor, bakery_owner):
        gone = make_vendor(bakery_owner, deleted_at=utc_now())
        assert isinstance(resolve_vendor(session, gone.id), BakeryVendor)

    def test_customer_is_not_a_vendor(self, session, customer):
        assert resolve_vendor(session, customer.id) is None

    def test_unknown_id(self, session):
        assert resolve_vendor(session, "nope") is None


class TestVendorModerationService:
    @pytest.fixture
    def moderation(self, session) -> VendorModerationService:
        return VendorModerationService(session)

    @pytest.fixture
    def users(self, session) -> UserRepository:
        return UserRepository(session)

    def test_approve_last_pending_vendor_verifies_owner(
        self, moderation, users, make_user, make_vendor
    ):
        owner = make_user(role=UserRole.BAKERY_OWNER, is_verified=False)
        vendor = make_vendor(owner, status=PENDING)

        result = moderation.approve(vendor.id)

        assert result.message == "Vendor approved successfully"
        assert result.target.vendor.status == VendorApprovalStatus.APPROVED
        assert users.get(owner.id).is_verified is True

    def test_owner_stays_unverified_while_vendors_pending(
        self, moderation, users, make_user, make_vendor
    ):
        owner = make_user(role=UserRole.BAKERY_OWNER, is_verified=False)
        first = make_vendor(owner, status=PENDING)
        make_vendor(owner, status=PENDING)

        moderation.approve(first.id)
        assert users.get(owner.id).is_verified is False

    def test_approve_owner_account(self, moderation, users, make_user, make_vendor, session):
        owner = make_user(role=UserRole.RESTAURANT_OWNER, is_verified=False)
        make_vendor(owner, kind=VendorKind.RESTAURANT, status=PENDING)
        make_vendor(owner, kind=VendorKind.RESTAURANT, status=PENDING)

        result = moderation.approve(owner.id)

        assert result.message == "Owner account and associated vendors approved successfully"
        assert users.get(owner.id).is_verified is True
        repo = VendorRepository(session, VendorKind.RESTAURANT)
        assert all(v.status == VendorApprovalStatus.APPROVED for v in repo.list_by_owner(owner.id))

    def test_reject_last_approved_vendor_unverifies_owner(
        self, moderation, users, bakery, bakery_owner
    ):
        result = moderation.reject(bakery.id, reason="expired licence")

        assert result.target.vendor.status == VendorApprovalStatus.REJECTED
        assert users.get(bakery_owner.id).is_verified is False

    def test_reject_keeps_owner_verified_with_other_approved_vendor(
        self, moderation, users, make_vendor, bakery, bakery_owner
    ):
        make_vendor(bakery_owner, name="Second branch")
        moderation.reject(bakery.id)
        assert users.get(bakery_owner.id).is_verified is True

    def test_unknown_vendor(self, moderation):
        with pytest.raises(NotFoundError, match="Vendor not found"):
            moderation.approve("missing")

    def test_suspend_and_activate(self, moderation, users, customer):
        suspended = moderation.suspend_user(customer.id)
        assert users.get(customer.id).is_suspended is True
        assert suspended.id == customer.id

        moderation.activate_user(customer.id)
        assert users.get(customer.id).is_suspended is False

    def test_suspend_unknown_user(self, moderation):
        with pytest.raises(NotFoundError, match="User not found"):
            moderation.suspend_user("missing")
