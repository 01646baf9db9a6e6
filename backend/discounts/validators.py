"""
Coupon rule evaluation.

The validator is pure: the caller fetches the coupon record (or passes
None for an unknown code) and supplies the order subtotal. Usage counting
happens later, in CouponService.redeem, once the order is accepted.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
import logging

from django.utils import timezone

from pricing.money import Amount, to_decimal
from pricing.types import CouponDiscount, DiscountType
from .exceptions import (
    CouponBelowMinimumError,
    CouponExpiredError,
    CouponInactiveError,
    CouponNotFoundError,
    CouponNotYetValidError,
    CouponUsageLimitReachedError,
)
from .models import Coupon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedCoupon:
    id: int
    code: str
    type: DiscountType
    value: Decimal
    max_discount: Optional[Decimal] = None

    def as_discount(self) -> CouponDiscount:
        return CouponDiscount(
            code=self.code,
            value=self.value,
            type=self.type,
            max_discount=self.max_discount,
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "type": self.type.value,
            "value": self.value,
            "max_discount": self.max_discount,
        }


class CouponValidator:
    @staticmethod
    def validate(coupon: Optional[Coupon], subtotal: Amount, now: Optional[datetime] = None) -> ValidatedCoupon:
        """
        Check a coupon against the current time and order subtotal.

        Raises the first applicable CouponError subclass. The usage limit
        is checked before the activity and date rules, so an exhausted
        coupon always reports usage_limit_reached.
        """
        if coupon is None:
            raise CouponNotFoundError()

        now = now or timezone.now()
        subtotal = to_decimal(subtotal)

        if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
            raise CouponUsageLimitReachedError()

        if not coupon.is_active:
            raise CouponInactiveError()

        if coupon.expires_at and now > coupon.expires_at:
            raise CouponExpiredError()

        if coupon.starts_at and now < coupon.starts_at:
            raise CouponNotYetValidError()

        if coupon.min_order_amount is not None and subtotal < coupon.min_order_amount:
            raise CouponBelowMinimumError(min_order_amount=coupon.min_order_amount)

        logger.debug(f"Coupon {coupon.code} accepted for subtotal {subtotal}")
        return ValidatedCoupon(
            id=coupon.id,
            code=coupon.code,
            type=DiscountType(coupon.type),
            value=to_decimal(coupon.value),
            max_discount=to_decimal(coupon.max_discount) if coupon.max_discount is not None else None,
        )
