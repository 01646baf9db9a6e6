from abc import ABC, abstractmethod
from decimal import Decimal
import logging

from pricing.money import calculate_percentage
from pricing.types import CouponDiscount, DiscountType, FixedDiscount, PercentageDiscount

logger = logging.getLogger(__name__)


class DiscountStrategy(ABC):
    """The interface for a discount strategy."""

    @abstractmethod
    def calculate(self, subtotal: Decimal, discount) -> Decimal:
        """Raw discount amount; the calculator clamps it to [0, subtotal]."""


class PercentageDiscountStrategy(DiscountStrategy):
    """Takes a percentage off the entire subtotal."""

    def calculate(self, subtotal: Decimal, discount: PercentageDiscount) -> Decimal:
        return calculate_percentage(subtotal, discount.value)


class FixedAmountDiscountStrategy(DiscountStrategy):
    """Takes a fixed amount off the entire subtotal."""

    def calculate(self, subtotal: Decimal, discount: FixedDiscount) -> Decimal:
        return discount.value


class CouponDiscountStrategy(DiscountStrategy):
    """
    A validated coupon behaves like a percentage or fixed discount depending
    on its type, then is capped by the coupon's max_discount.
    """

    def calculate(self, subtotal: Decimal, discount: CouponDiscount) -> Decimal:
        if discount.type == DiscountType.PERCENTAGE:
            amount = calculate_percentage(subtotal, discount.value)
        else:
            amount = discount.value

        if discount.max_discount is not None and amount > discount.max_discount:
            logger.debug(f"Coupon {discount.code} capped at {discount.max_discount}")
            amount = discount.max_discount

        return amount
