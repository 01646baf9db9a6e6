"""
Document renderers: turn an order into customer receipts and kitchen dockets.

Renderers are pure. They never touch printers, files or the database,
and identical inputs always produce identical documents.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pricing.money import format_amount
from .documents import (
    CUSTOMER,
    DEFAULT_LINE_WIDTH,
    KITCHEN,
    Align,
    DocumentBuilder,
    FontScale,
    ReceiptDocument,
)
from .types import PrintableOrder, ShopDetails

logger = logging.getLogger(__name__)

PRINT_CUSTOMER = "customer"
PRINT_KITCHEN = "kitchen"
PRINT_BOTH = "both"
PRINT_TYPES = (PRINT_CUSTOMER, PRINT_KITCHEN, PRINT_BOTH)

# 58mm paper: 384 dots across 32 characters
DOTS_PER_CHAR = 12
PRICE_COLUMN_WIDTH = 10
QR_WIDTH = 192
TRAILING_FEED = 4

ORDER_TYPE_LABELS = {
    "online": "ONLINE ORDER",
}


def order_type_label(value: str) -> str:
    """
    >>> order_type_label("dine_in")
    'DINE IN'
    >>> order_type_label("take-away")
    'TAKE AWAY'
    """
    value = value or ""
    if value.lower() in ORDER_TYPE_LABELS:
        return ORDER_TYPE_LABELS[value.lower()]
    return value.replace("_", " ").replace("-", " ").upper()


def format_timestamp(dt: datetime) -> str:
    return dt.strftime("%d/%m/%Y %H:%M")


def format_percent(rate: Decimal) -> str:
    # 10.00 -> "10", 12.50 -> "12.5"
    return format(rate.normalize(), "f")


class CustomerReceiptRenderer:
    """
    Lays out the customer-facing receipt: shop header, order info, lines
    with modifiers and notes, totals, payment and footer.
    """

    def __init__(self, line_width: int = DEFAULT_LINE_WIDTH):
        self.line_width = line_width

    def _money(self, amount, shop: ShopDetails) -> str:
        return format_amount(amount, symbol=shop.currency_symbol, currency=shop.currency)

    def _row(self, doc: DocumentBuilder, left: str, right: str, scale=FontScale.NORMAL, bold=False):
        doc.columns(
            [left, right],
            [self.line_width - PRICE_COLUMN_WIDTH, PRICE_COLUMN_WIDTH],
            [Align.LEFT, Align.RIGHT],
            scale=scale,
            bold=bold,
        )

    def render(self, order: PrintableOrder, shop: ShopDetails) -> ReceiptDocument:
        doc = DocumentBuilder(CUSTOMER, self.line_width)

        # Header
        if shop.logo_ref:
            doc.image(
                shop.logo_ref,
                width=self.line_width * DOTS_PER_CHAR,
                align=Align.CENTER,
            )
        doc.text(shop.name, align=Align.CENTER, scale=FontScale.DOUBLE_HEIGHT, bold=True)
        if shop.address:
            doc.text(shop.address, align=Align.CENTER)
        if shop.phone:
            doc.text(f"Tel: {shop.phone}", align=Align.CENTER)
        doc.divider()

        # Order info
        doc.text(order_type_label(order.order_type), align=Align.CENTER, bold=True)
        doc.text(f"#{order.order_number}", align=Align.CENTER, scale=FontScale.MAXIMUM, bold=True)
        doc.text(format_timestamp(order.created_at), align=Align.CENTER)
        doc.divider()

        # Lines
        for item in order.items:
            self._row(doc, f"{item.quantity}x {item.name}", self._money(item.total_price, shop))
            for modifier in item.modifiers:
                if modifier.price:
                    self._row(doc, f"  + {modifier.name}", self._money(modifier.price, shop))
                else:
                    doc.text(f"  + {modifier.name}")
            if item.notes:
                doc.text(f"  Note: {item.notes}")
        doc.divider()

        # Totals
        self._row(doc, "Subtotal:", self._money(order.subtotal, shop))
        if order.discount:
            self._row(doc, "Discount:", self._money(-order.discount, shop))
        self._row(doc, f"Tax ({format_percent(order.tax_rate)}%):", self._money(order.tax, shop))
        self._row(doc, "TOTAL:", self._money(order.total, shop), scale=FontScale.DOUBLE_HEIGHT, bold=True)
        doc.divider()

        # Footer
        if order.payment_method:
            doc.text(f"Paid by: {order.payment_method.upper()}", align=Align.CENTER)
        if shop.vat_number:
            doc.text(f"VAT No: {shop.vat_number}", align=Align.CENTER)
        if shop.footer_text:
            doc.feed(1)
            for line in shop.footer_text.splitlines():
                doc.text(line, align=Align.CENTER)
        if shop.qr_data:
            doc.image(f"qr:{shop.qr_data}", width=QR_WIDTH, align=Align.CENTER)

        doc.feed(TRAILING_FEED)
        doc.cut()
        return doc.build()


class KitchenDocketRenderer:
    """
    Lays out the kitchen docket. Large order number and items, emphasised
    notes, and never any prices.
    """

    def __init__(self, line_width: int = DEFAULT_LINE_WIDTH):
        self.line_width = line_width

    def render(self, order: PrintableOrder, shop: Optional[ShopDetails] = None) -> ReceiptDocument:
        doc = DocumentBuilder(KITCHEN, self.line_width)

        doc.text(f"#{order.order_number}", align=Align.CENTER, scale=FontScale.MAXIMUM, bold=True)
        doc.text(order_type_label(order.order_type), align=Align.CENTER, scale=FontScale.DOUBLE_HEIGHT, bold=True)
        doc.text(format_timestamp(order.created_at), align=Align.CENTER)
        doc.divider("=")

        if order.customer_name:
            doc.text(f"Customer: {order.customer_name}")
            doc.divider("=")

        for item in order.items:
            doc.text(f"{item.quantity}x {item.name}", scale=FontScale.DOUBLE_HEIGHT, bold=True)
            for modifier in item.modifiers:
                doc.text(f"  + {modifier.name}")
            if item.notes:
                doc.text(f"  *** {item.notes} ***", bold=True)
            doc.feed(1)

        if order.notes:
            doc.divider("=")
            doc.text(f"NOTES: {order.notes}", bold=True)

        doc.divider("=")
        doc.feed(TRAILING_FEED)
        doc.cut()
        return doc.build()


def render_documents(
    order: PrintableOrder,
    shop: ShopDetails,
    print_type: str = PRINT_BOTH,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> List[ReceiptDocument]:
    """Render the documents requested by `print_type`, customer first."""
    if print_type not in PRINT_TYPES:
        raise ValueError(f"Unknown print type '{print_type}'")

    documents = []
    if print_type in (PRINT_CUSTOMER, PRINT_BOTH):
        documents.append(CustomerReceiptRenderer(line_width).render(order, shop))
    if print_type in (PRINT_KITCHEN, PRINT_BOTH):
        documents.append(KitchenDocketRenderer(line_width).render(order, shop))
    logger.debug(f"Rendered {len(documents)} document(s) for order #{order.order_number}")
    return documents
