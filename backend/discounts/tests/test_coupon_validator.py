"""
Coupon rule tests.

CouponValidator is pure, so the rule matrix runs against unsaved Coupon
instances. Redemption and lookup tests use the database.
"""
import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from discounts.exceptions import (
    CouponBelowMinimumError,
    CouponExpiredError,
    CouponInactiveError,
    CouponNotFoundError,
    CouponNotYetValidError,
    CouponUsageLimitReachedError,
    DiscountValidationError,
)
from discounts.models import Coupon, CouponRedemption
from discounts.services import CouponService
from discounts.validators import CouponValidator
from pricing.calculators import price_cart
from pricing.types import CartLine, CouponDiscount, DiscountType


def make_coupon(**overrides):
    fields = {
        "id": 1,
        "code": "SAVE10",
        "type": Coupon.CouponType.PERCENTAGE,
        "value": Decimal("10.00"),
        "is_active": True,
    }
    fields.update(overrides)
    return Coupon(**fields)


class TestCouponValidator:
    """Test each rule in isolation and the order in which they apply"""

    def test_valid_coupon_returns_descriptor(self):
        validated = CouponValidator.validate(make_coupon(max_discount=Decimal("5.00")), "20.00")

        assert validated.code == "SAVE10"
        assert validated.type == DiscountType.PERCENTAGE
        assert validated.value == Decimal("10.00")
        assert validated.as_discount() == CouponDiscount(
            code="SAVE10", value="10.00", type="PERCENTAGE", max_discount="5.00"
        )

    def test_missing_coupon(self):
        with pytest.raises(CouponNotFoundError) as exc_info:
            CouponValidator.validate(None, "10.00")
        assert exc_info.value.code == "not_found"

    def test_inactive(self):
        with pytest.raises(CouponInactiveError):
            CouponValidator.validate(make_coupon(is_active=False), "10.00")

    def test_expired(self):
        now = timezone.now()
        coupon = make_coupon(expires_at=now - timedelta(minutes=1))
        with pytest.raises(CouponExpiredError) as exc_info:
            CouponValidator.validate(coupon, "10.00", now=now)
        assert exc_info.value.code == "expired"

    def test_expiry_instant_is_still_valid(self):
        now = timezone.now()
        coupon = make_coupon(expires_at=now)
        assert CouponValidator.validate(coupon, "10.00", now=now).code == "SAVE10"

    def test_not_yet_valid(self):
        now = timezone.now()
        coupon = make_coupon(starts_at=now + timedelta(days=1))
        with pytest.raises(CouponNotYetValidError):
            CouponValidator.validate(coupon, "10.00", now=now)

    def test_below_minimum(self):
        coupon = make_coupon(min_order_amount=Decimal("25.00"))
        with pytest.raises(CouponBelowMinimumError) as exc_info:
            CouponValidator.validate(coupon, "24.99")
        assert exc_info.value.code == "below_minimum"
        assert "$25.00" in exc_info.value.message

    def test_exactly_minimum_is_accepted(self):
        coupon = make_coupon(min_order_amount=Decimal("25.00"))
        assert CouponValidator.validate(coupon, "25.00").code == "SAVE10"

    def test_usage_limit_reached(self):
        coupon = make_coupon(usage_limit=1, usage_count=1)
        with pytest.raises(CouponUsageLimitReachedError):
            CouponValidator.validate(coupon, "10.00")

    def test_usage_limit_wins_over_other_failures(self):
        """An exhausted coupon reports usage_limit_reached regardless of other fields"""
        now = timezone.now()
        coupon = make_coupon(
            usage_limit=1,
            usage_count=1,
            is_active=False,
            expires_at=now - timedelta(days=1),
            min_order_amount=Decimal("100.00"),
        )
        with pytest.raises(CouponUsageLimitReachedError):
            CouponValidator.validate(coupon, "1.00", now=now)

    def test_inactive_checked_before_dates(self):
        now = timezone.now()
        coupon = make_coupon(is_active=False, expires_at=now - timedelta(days=1))
        with pytest.raises(CouponInactiveError):
            CouponValidator.validate(coupon, "10.00", now=now)

    def test_validated_coupon_prices_with_cap(self):
        coupon = make_coupon(value=Decimal("50.00"), max_discount=Decimal("10.00"))
        discount = CouponValidator.validate(coupon, "100.00").as_discount()

        priced = price_cart([CartLine(product_id="p", unit_base_price="100.00")], discount=discount)
        assert priced.discount_amount == Decimal("10.00")


@pytest.mark.django_db
class TestCouponService:
    """Test lookup and redemption against the database"""

    def test_code_stored_upper_case_and_looked_up_case_insensitively(self):
        CouponService.create_coupon(code=" save10 ", type="PERCENTAGE", value=Decimal("10"))

        coupon = CouponService.get_by_code("Save10")
        assert coupon is not None
        assert coupon.code == "SAVE10"

    def test_unknown_code_returns_none(self):
        assert CouponService.get_by_code("NOPE") is None

    def test_validate_code_blank(self):
        with pytest.raises(DiscountValidationError):
            CouponService.validate_code("   ", "10.00")

    def test_validate_code_unknown(self):
        with pytest.raises(CouponNotFoundError):
            CouponService.validate_code("NOPE", "10.00")

    def test_redeem_is_idempotent_per_order(self):
        coupon = CouponService.create_coupon(code="ONCE", type="FIXED", value=Decimal("5"), usage_limit=5)

        assert CouponService.redeem(coupon, "order-1") is True
        assert CouponService.redeem(coupon, "order-1") is False
        assert CouponService.redeem(coupon, "order-2") is True

        coupon.refresh_from_db()
        assert coupon.usage_count == 2
        assert CouponRedemption.objects.filter(coupon=coupon).count() == 2

    def test_validation_never_increments_usage(self):
        coupon = CouponService.create_coupon(code="LOOK", type="FIXED", value=Decimal("5"))
        CouponService.validate_code("look", "10.00")
        CouponService.validate_code("look", "10.00")

        coupon.refresh_from_db()
        assert coupon.usage_count == 0

    def test_single_use_coupon_rejected_after_redemption(self):
        coupon = CouponService.create_coupon(code="SINGLE", type="FIXED", value=Decimal("5"), usage_limit=1)
        CouponService.validate_code("SINGLE", "10.00")
        CouponService.redeem(coupon, "order-1")

        with pytest.raises(CouponUsageLimitReachedError):
            CouponService.validate_code("SINGLE", "10.00")

    def test_redeem_respects_limit_after_concurrent_validation(self):
        coupon = CouponService.create_coupon(code="LAST", type="FIXED", value=Decimal("5"), usage_limit=1)

        # Both checkouts pass validation before either one redeems
        first = CouponService.validate_code("LAST", "10.00")
        second = CouponService.validate_code("LAST", "10.00")

        assert CouponService.redeem(first, "order-1") is True
        with pytest.raises(CouponUsageLimitReachedError):
            CouponService.redeem(second, "order-2")

        coupon.refresh_from_db()
        assert coupon.usage_count == 1
        assert not CouponRedemption.objects.filter(coupon=coupon, order_id="order-2").exists()

    def test_unlimited_coupon_keeps_counting(self):
        coupon = CouponService.create_coupon(code="ALWAYS", type="FIXED", value=Decimal("5"))

        for n in range(3):
            CouponService.redeem(coupon, f"order-{n}")

        coupon.refresh_from_db()
        assert coupon.usage_count == 3
