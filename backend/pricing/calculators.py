"""
Order and cart financial calculator.

Shared by the terminal cart (display running totals), order creation
(persisted totals) and reprints, so every surface agrees on the numbers.

Pipeline:
    subtotal      = sum(line.total_price)
    discount      = strategy amount, clamped to [0, subtotal]
    after_discount = subtotal - discount
    tax           = after_discount * tax_rate / 100
    total         = after_discount + tax

Intermediate values keep full Decimal precision; rounding happens only
when the caller asks for PricedOrder.quantized().

Usage:
    from pricing.calculators import OrderCalculator
    priced = OrderCalculator(lines, discount=PercentageDiscount(10), tax_rate=10).calculate_totals()
    priced.quantized("USD").total
"""

from decimal import Decimal
from typing import Iterable, Optional

from discounts.factories import DiscountStrategyFactory
from .money import calculate_percentage, to_decimal
from .types import CartLine, Discount, PricedOrder


class OrderCalculator:
    """
    Pure calculator over a list of CartLine values.

    No exceptions are raised for valid input; negative prices or
    quantities are rejected by callers before reaching this stage.
    """

    def __init__(
        self,
        lines: Iterable[CartLine],
        discount: Optional[Discount] = None,
        tax_rate=Decimal("0"),
    ):
        self.lines = list(lines)
        self.discount = discount
        self.tax_rate = to_decimal(tax_rate or 0)

    def calculate_subtotal(self) -> Decimal:
        # Start with Decimal('0') to ensure return type is always Decimal
        return sum((line.total_price for line in self.lines), Decimal("0"))

    def calculate_discount(self, subtotal: Decimal) -> Decimal:
        """
        Discount amount for the configured discount, clamped to [0, subtotal].
        """
        if self.discount is None:
            return Decimal("0")

        strategy = DiscountStrategyFactory.get_strategy(self.discount)
        amount = strategy.calculate(subtotal, self.discount)
        return min(max(amount, Decimal("0")), subtotal)

    def calculate_tax(self, after_discount: Decimal) -> Decimal:
        return calculate_percentage(after_discount, self.tax_rate)

    def calculate_totals(self) -> PricedOrder:
        """
        Calculate all totals in one pass.
        """
        subtotal = self.calculate_subtotal()
        discount_amount = self.calculate_discount(subtotal)
        after_discount = subtotal - discount_amount
        tax_amount = self.calculate_tax(after_discount)

        return PricedOrder(
            subtotal=subtotal,
            discount_amount=discount_amount,
            tax_rate=self.tax_rate,
            tax_amount=tax_amount,
            total=after_discount + tax_amount,
            item_count=sum(line.quantity for line in self.lines),
            lines=tuple(self.lines),
        )


def price_cart(lines: Iterable[CartLine], discount: Optional[Discount] = None, tax_rate=0) -> PricedOrder:
    return OrderCalculator(lines, discount=discount, tax_rate=tax_rate).calculate_totals()
