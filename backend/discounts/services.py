from django.db import transaction
from django.db.models import F, Q
import logging

from .exceptions import CouponUsageLimitReachedError, DiscountValidationError
from .models import Coupon, CouponRedemption
from .validators import CouponValidator, ValidatedCoupon

logger = logging.getLogger(__name__)


class CouponService:
    """
    Lookup, validation and redemption of coupon codes.
    This is the only place that mutates a coupon's usage count.
    """

    @staticmethod
    def normalize_code(code) -> str:
        return (code or "").strip().upper()

    @staticmethod
    def get_by_code(code):
        """Case-insensitive lookup; returns None for unknown codes."""
        normalized = CouponService.normalize_code(code)
        if not normalized:
            return None
        return Coupon.objects.filter(code=normalized).first()

    @staticmethod
    def validate_code(code, subtotal, now=None) -> ValidatedCoupon:
        """
        Look up a code and run it through the coupon rules.

        Raises DiscountValidationError for a blank code and a CouponError
        subclass when the coupon is rejected.
        """
        if not CouponService.normalize_code(code):
            raise DiscountValidationError("Coupon code is required")

        coupon = CouponService.get_by_code(code)
        return CouponValidator.validate(coupon, subtotal, now=now)

    @staticmethod
    @transaction.atomic
    def redeem(coupon, order_id) -> bool:
        """
        Record one use of the coupon for the given order.

        Safe to call more than once for the same order: only the first call
        creates the redemption row and increments usage_count. Raises
        CouponUsageLimitReachedError, rolling back the redemption row, when
        another order used up the coupon after this one was validated.
        """
        coupon_id = coupon.id if isinstance(coupon, (Coupon, ValidatedCoupon)) else coupon
        _, created = CouponRedemption.objects.get_or_create(
            coupon_id=coupon_id, order_id=str(order_id)
        )
        if not created:
            logger.info(f"Coupon {coupon_id} already redeemed for order {order_id}")
            return False

        updated = (
            Coupon.objects.filter(pk=coupon_id)
            .filter(Q(usage_limit__isnull=True) | Q(usage_count__lt=F("usage_limit")))
            .update(usage_count=F("usage_count") + 1)
        )
        if not updated:
            logger.warning(f"Coupon {coupon_id} reached its usage limit before order {order_id} was placed")
            raise CouponUsageLimitReachedError()

        logger.info(f"Coupon {coupon_id} redeemed for order {order_id}")
        return True

    @staticmethod
    @transaction.atomic
    def create_coupon(**fields) -> Coupon:
        fields["code"] = CouponService.normalize_code(fields.get("code"))
        if not fields["code"]:
            raise DiscountValidationError("Coupon code is required")
        coupon = Coupon(**fields)
        coupon.full_clean()
        coupon.save()
        logger.info(f"Created coupon {coupon.code}")
        return coupon
