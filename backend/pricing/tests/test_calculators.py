"""
Pricing engine tests.

The calculator is pure, so none of these tests touch the database.
"""

import pytest
from decimal import Decimal

from discounts.factories import DiscountStrategyFactory
from pricing.calculators import OrderCalculator, price_cart
from pricing.money import format_amount
from pricing.types import (
    CartLine,
    CouponDiscount,
    DiscountType,
    FixedDiscount,
    Modifier,
    PercentageDiscount,
)


@pytest.fixture
def two_burgers():
    return [CartLine(product_id="burger", unit_base_price=Decimal("6.99"), quantity=2, name="Burger")]


class TestLineTotals:
    def test_modifiers_are_added_per_unit(self):
        line = CartLine(
            product_id="coffee",
            unit_base_price="3.50",
            quantity=3,
            modifiers=[Modifier(id="m1", name="Oat milk", price="0.50"), Modifier(id="m2", name="Shot", price="0.75")],
        )
        assert line.unit_price == Decimal("4.75")
        assert line.total_price == Decimal("14.25")

    def test_empty_cart_prices_to_zero(self):
        priced = price_cart([], tax_rate=10)
        assert priced.subtotal == Decimal("0")
        assert priced.total == Decimal("0")
        assert priced.item_count == 0


class TestOrderCalculator:
    """Test the subtotal -> discount -> tax -> total pipeline."""

    def test_worked_example(self, two_burgers):
        """6.99 x 2 with 10% off and 10% tax renders as $13.84"""
        priced = OrderCalculator(two_burgers, discount=PercentageDiscount(10), tax_rate=10).calculate_totals()

        assert priced.subtotal == Decimal("13.98")
        assert priced.discount_amount == Decimal("1.398")
        assert priced.after_discount == Decimal("12.582")
        assert priced.tax_amount == Decimal("1.2582")
        assert priced.total == Decimal("13.8402")
        assert priced.quantized("USD").total == Decimal("13.84")
        assert format_amount(priced.total) == "$13.84"

    def test_no_discount_no_tax(self, two_burgers):
        priced = price_cart(two_burgers)
        assert priced.discount_amount == Decimal("0")
        assert priced.tax_amount == Decimal("0")
        assert priced.total == Decimal("13.98")
        assert priced.item_count == 2

    def test_fixed_discount_larger_than_subtotal_is_clamped(self):
        lines = [CartLine(product_id="tea", unit_base_price="5.00")]
        priced = price_cart(lines, discount=FixedDiscount("20.00"), tax_rate=10)

        assert priced.discount_amount == Decimal("5.00")
        assert priced.tax_amount == Decimal("0")
        assert priced.total == Decimal("0")

    def test_percentage_over_100_is_clamped(self, two_burgers):
        priced = price_cart(two_burgers, discount=PercentageDiscount(150))
        assert priced.discount_amount == priced.subtotal
        assert priced.total == Decimal("0")

    def test_negative_fixed_discount_is_clamped_to_zero(self, two_burgers):
        priced = price_cart(two_burgers, discount=FixedDiscount("-3"))
        assert priced.discount_amount == Decimal("0")

    def test_coupon_max_discount_caps_percentage(self):
        lines = [CartLine(product_id="steak", unit_base_price="100.00")]
        coupon = CouponDiscount(code="HALF", value="50", type=DiscountType.PERCENTAGE, max_discount="10.00")
        priced = price_cart(lines, discount=coupon)
        assert priced.discount_amount == Decimal("10.00")
        assert priced.total == Decimal("90.00")

    def test_fixed_coupon(self, two_burgers):
        coupon = CouponDiscount(code="FIVE", value="5", type="FIXED")
        priced = price_cart(two_burgers, discount=coupon)
        assert priced.discount_amount == Decimal("5")

    def test_total_is_monotonic_in_quantity(self):
        discount = PercentageDiscount(15)
        totals = [
            price_cart(
                [CartLine(product_id="x", unit_base_price="2.49", quantity=qty)],
                discount=discount,
                tax_rate="8.25",
            ).total
            for qty in range(1, 8)
        ]
        assert totals == sorted(totals)

    def test_quantized_as_dict(self, two_burgers):
        priced = price_cart(two_burgers, discount=PercentageDiscount(10), tax_rate=10)
        data = priced.as_dict("USD")
        assert data["discount_amount"] == Decimal("1.40")
        assert data["tax_amount"] == Decimal("1.26")
        assert data["total"] == Decimal("13.84")


class TestDiscountStrategyFactory:
    def test_unknown_variant_raises(self):
        with pytest.raises(NotImplementedError):
            DiscountStrategyFactory.get_strategy(object())
