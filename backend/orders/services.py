from decimal import Decimal
import logging

from django.db import transaction
from django.utils import timezone

from discounts.services import CouponService
from pricing.calculators import OrderCalculator
from pricing.money import quantize
from pricing.types import CartLine, FixedDiscount, Modifier, PercentageDiscount
from printing.tasks import print_order_documents
from printing.types import PrintableItem, PrintableModifier, PrintableOrder
from .exceptions import OrderValidationError
from .models import Order, OrderItem, OrderItemModifier

logger = logging.getLogger(__name__)


class OrderService:
    """Order creation and conversion of persisted orders for printing."""

    MANUAL_DISCOUNTS = {
        "percentage": PercentageDiscount,
        "fixed": FixedDiscount,
    }

    @staticmethod
    def build_cart_lines(items) -> list:
        lines = []
        for item in items:
            lines.append(
                CartLine(
                    product_id=str(item.get("product_id", "")),
                    name=item["name"],
                    unit_base_price=item["price"],
                    quantity=item.get("quantity", 1),
                    modifiers=[
                        Modifier(id=str(m.get("id", "")), name=m["name"], price=m.get("price", Decimal("0")))
                        for m in item.get("modifiers", [])
                    ],
                    note=item.get("notes") or None,
                )
            )
        return lines

    @staticmethod
    def resolve_discount(data: dict, subtotal: Decimal):
        """
        Returns (discount, validated_coupon). A coupon code is validated
        against the cart subtotal; CouponError propagates to the caller.
        """
        coupon_code = data.get("coupon_code")
        if coupon_code:
            validated = CouponService.validate_code(coupon_code, subtotal)
            return validated.as_discount(), validated

        manual = data.get("discount")
        if not manual:
            return None, None

        discount_class = OrderService.MANUAL_DISCOUNTS.get(manual.get("type"))
        if discount_class is None:
            raise OrderValidationError(f"Unknown discount type '{manual.get('type')}'")
        return discount_class(manual["value"]), None

    @staticmethod
    @transaction.atomic
    def create_order(data: dict, user=None) -> Order:
        """
        Price the cart, persist the order and its item snapshots, redeem
        the coupon (if any) and queue receipt printing once committed.

        Raises OrderValidationError for an empty cart and a CouponError
        subclass when the coupon is rejected; nothing is persisted then.
        """
        from shop_settings.config import app_settings

        items = data.get("items") or []
        if not items:
            raise OrderValidationError("An order needs at least one item")

        lines = OrderService.build_cart_lines(items)
        calculator = OrderCalculator(lines, tax_rate=app_settings.tax_rate)
        discount, coupon = OrderService.resolve_discount(data, calculator.calculate_subtotal())
        calculator.discount = discount

        priced = calculator.calculate_totals().quantized(app_settings.currency)

        order = Order.objects.create(
            order_type=data.get("order_type", Order.OrderType.DINE_IN),
            payment_method=data.get("payment_method", ""),
            customer_name=data.get("customer_name", ""),
            customer_phone=data.get("customer_phone", ""),
            customer_email=data.get("customer_email", ""),
            notes=data.get("notes", ""),
            cashier=user if user is not None and user.is_authenticated else None,
            subtotal=priced.subtotal,
            discount_amount=priced.discount_amount,
            tax_rate=priced.tax_rate,
            tax_amount=priced.tax_amount,
            total=priced.total,
            discount_type="coupon" if coupon else (data.get("discount") or {}).get("type", ""),
            discount_value=coupon.value if coupon else getattr(discount, "value", None),
            coupon_code=coupon.code if coupon else "",
        )
        OrderService._create_items(order, lines, app_settings.currency)

        if coupon is not None:
            CouponService.redeem(coupon, order.id)

        logger.info(
            f"Created order #{order.order_number} ({order.order_type}): "
            f"{priced.item_count} items, total {order.total}"
        )

        order_id = str(order.id)
        transaction.on_commit(lambda: print_order_documents.delay(order_id))
        return order

    @staticmethod
    def _create_items(order: Order, lines, currency: str):
        for position, line in enumerate(lines):
            item = OrderItem.objects.create(
                order=order,
                product_id=line.product_id,
                name=line.name,
                quantity=line.quantity,
                unit_price=quantize(currency, line.unit_price),
                total_price=quantize(currency, line.total_price),
                notes=line.note or "",
                position=position,
            )
            OrderItemModifier.objects.bulk_create(
                [
                    OrderItemModifier(order_item=item, modifier_id=m.id, name=m.name, price=m.price)
                    for m in line.modifiers
                ]
            )

    @staticmethod
    def build_printable_order(order: Order) -> PrintableOrder:
        """Snapshot a persisted order for the receipt renderers."""
        items = [
            PrintableItem(
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                notes=item.notes or None,
                modifiers=[PrintableModifier(name=m.name, price=m.price) for m in item.modifiers.all()],
            )
            for item in order.items.all()
        ]
        return PrintableOrder(
            order_number=order.order_number,
            order_type=order.order_type,
            created_at=timezone.localtime(order.created_at),
            items=items,
            subtotal=order.subtotal,
            discount=order.discount_amount,
            tax=order.tax_amount,
            total=order.total,
            tax_rate=order.tax_rate,
            payment_method=order.payment_method or None,
            customer_name=order.customer_name or None,
            notes=order.notes or None,
        )

