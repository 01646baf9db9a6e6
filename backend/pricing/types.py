"""
Value types consumed and produced by the pricing engine.

These are plain dataclasses so that carts coming from the terminal, the
storefront and persisted orders can all be priced through the same path
without touching the ORM.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .money import quantize, to_decimal


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


@dataclass(frozen=True)
class Modifier:
    id: str
    name: str
    price: Decimal = Decimal("0.00")

    def __post_init__(self):
        object.__setattr__(self, "price", to_decimal(self.price))


@dataclass(frozen=True)
class CartLine:
    """
    A single cart/order line.

    Callers guarantee quantity >= 1 and non-negative prices before pricing.
    """

    product_id: str
    unit_base_price: Decimal
    quantity: int = 1
    modifiers: Tuple[Modifier, ...] = ()
    note: Optional[str] = None
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "unit_base_price", to_decimal(self.unit_base_price))
        object.__setattr__(self, "modifiers", tuple(self.modifiers))

    @property
    def modifiers_total(self) -> Decimal:
        return sum((m.price for m in self.modifiers), Decimal("0"))

    @property
    def unit_price(self) -> Decimal:
        return self.unit_base_price + self.modifiers_total

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PercentageDiscount:
    value: Decimal

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))


@dataclass(frozen=True)
class FixedDiscount:
    value: Decimal

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))


@dataclass(frozen=True)
class CouponDiscount:
    code: str
    value: Decimal
    type: DiscountType
    max_discount: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))
        object.__setattr__(self, "type", DiscountType(self.type))
        if self.max_discount is not None:
            object.__setattr__(self, "max_discount", to_decimal(self.max_discount))


Discount = Union[PercentageDiscount, FixedDiscount, CouponDiscount]


@dataclass(frozen=True)
class PricedOrder:
    """
    Result of pricing a cart.

    All amounts are full precision. Call quantized() at the boundary
    (persistence, receipts, display) to round to the currency's minor unit.
    """

    subtotal: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    item_count: int = 0
    lines: Sequence[CartLine] = field(default=(), compare=False, repr=False)

    @property
    def after_discount(self) -> Decimal:
        return self.subtotal - self.discount_amount

    def quantized(self, currency: str = "USD") -> "PricedOrder":
        return replace(
            self,
            subtotal=quantize(currency, self.subtotal),
            discount_amount=quantize(currency, self.discount_amount),
            tax_amount=quantize(currency, self.tax_amount),
            total=quantize(currency, self.total),
        )

    def as_dict(self, currency: str = "USD") -> dict:
        rounded = self.quantized(currency)
        return {
            "subtotal": rounded.subtotal,
            "discount_amount": rounded.discount_amount,
            "tax_rate": self.tax_rate,
            "tax_amount": rounded.tax_amount,
            "total": rounded.total,
            "item_count": self.item_count,
        }
