from datetime import datetime
from decimal import Decimal

from printing.types import PrintableItem, PrintableModifier, PrintableOrder, ShopDetails


def make_order(**overrides):
    fields = dict(
        order_number=42,
        order_type="dine_in",
        created_at=datetime(2024, 1, 15, 12, 30),
        items=[
            PrintableItem(
                name="Burger",
                quantity=2,
                unit_price=Decimal("6.99"),
                total_price=Decimal("13.98"),
                notes="well done",
                modifiers=[
                    PrintableModifier(name="Cheese", price=Decimal("0.50")),
                    PrintableModifier(name="No onion"),
                ],
            ),
        ],
        subtotal=Decimal("13.98"),
        discount=Decimal("1.40"),
        tax=Decimal("1.26"),
        total=Decimal("13.84"),
        tax_rate=Decimal("10.00"),
        payment_method="cash",
        customer_name="Sam",
        notes="Ring the bell",
    )
    fields.update(overrides)
    return PrintableOrder(**fields)


def make_shop(**overrides):
    fields = dict(
        name="Corner Grill",
        address="1 High Street",
        phone="0123 456",
        vat_number="GB123",
        currency_symbol="$",
        footer_text="Thank you for your order!",
        logo_ref="logo.png",
        qr_data="https://example.com/review",
    )
    fields.update(overrides)
    return ShopDetails(**fields)
