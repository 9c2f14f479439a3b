import pytest

from src.marketplace.core.models import VendorStatus
from src.marketplace.core.services import VendorEligibilityEvaluator
from src.marketplace.entities import VendorApprovalStatus, VendorKind
from src.marketplace.entities.core._base import utc_now


class TestVendorEligibilityEvaluator:
    @pytest.fixture
    def evaluator(self, session) -> VendorEligibilityEvaluator:
        return VendorEligibilityEvaluator(session)

    def test_customers_and_admins_have_no_vendor_status(self, evaluator, customer, admin):
        assert evaluator.evaluate(customer) is None
        assert evaluator.evaluate(admin) is None

    def test_owner_without_vendors(self, evaluator, bakery_owner):
        assert evaluator.evaluate(bakery_owner) == VendorStatus(
            vendor_type="bakery", has_vendor=False, approved=False, pending=False
        )

    def test_pending_vendor(self, evaluator, make_vendor, bakery_owner):
        make_vendor(bakery_owner, status=VendorApprovalStatus.PENDING_APPROVAL)
        status = evaluator.evaluate(bakery_owner)
        assert (status.has_vendor, status.approved, status.pending) == (True, False, True)

    def test_any_approved_vendor_wins(self, evaluator, make_vendor, bakery_owner):
        make_vendor(bakery_owner, status=VendorApprovalStatus.PENDING_APPROVAL)
        make_vendor(bakery_owner, status=VendorApprovalStatus.APPROVED)
        status = evaluator.evaluate(bakery_owner)
        assert (status.has_vendor, status.approved, status.pending) == (True, True, False)

    def test_rejected_only_counts_as_no_vendor(self, evaluator, make_vendor, bakery_owner):
        make_vendor(bakery_owner, status=VendorApprovalStatus.REJECTED)
        assert evaluator.evaluate(bakery_owner).has_vendor is False

    def test_deleted_vendors_are_ignored(self, evaluator, make_vendor, bakery_owner):
        make_vendor(bakery_owner, deleted_at=utc_now())
        assert evaluator.evaluate(bakery_owner).has_vendor is False

    def test_restaurant_owner_only_sees_restaurants(
        self, evaluator, make_vendor, restaurant_owner
    ):
        make_vendor(restaurant_owner, kind=VendorKind.BAKERY)
        assert evaluator.evaluate(restaurant_owner).has_vendor is False

        make_vendor(restaurant_owner, kind=VendorKind.RESTAURANT)
        status = evaluator.evaluate(restaurant_owner)
        assert status.vendor_type == "restaurant"
        assert status.approved is True
