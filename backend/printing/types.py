"""
Plain inputs for the document renderers.

Orders are converted to these before rendering so renderers stay free of
ORM access and can be fed from persisted orders, reprints or tests alike.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from pricing.money import to_decimal


@dataclass(frozen=True)
class PrintableModifier:
    name: str
    price: Decimal = Decimal("0.00")

    def __post_init__(self):
        object.__setattr__(self, "price", to_decimal(self.price))


@dataclass(frozen=True)
class PrintableItem:
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    notes: Optional[str] = None
    modifiers: Tuple[PrintableModifier, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        object.__setattr__(self, "total_price", to_decimal(self.total_price))
        object.__setattr__(self, "modifiers", tuple(self.modifiers))


@dataclass(frozen=True)
class PrintableOrder:
    order_number: int
    order_type: str
    created_at: datetime
    items: Tuple[PrintableItem, ...]
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal = Decimal("0")
    payment_method: Optional[str] = None
    customer_name: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        for name in ("subtotal", "discount", "tax", "total", "tax_rate"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))


@dataclass(frozen=True)
class ShopDetails:
    name: str
    address: str = ""
    phone: str = ""
    vat_number: Optional[str] = None
    currency_symbol: str = "$"
    footer_text: Optional[str] = None
    logo_ref: Optional[str] = None
    qr_data: Optional[str] = None
    currency: str = field(default="USD")
