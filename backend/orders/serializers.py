from decimal import Decimal

from rest_framework import serializers

from printing.renderers import PRINT_BOTH, PRINT_TYPES
from .models import Order, OrderItem, OrderItemModifier


# --- Input ---

class ModifierInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"))


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    quantity = serializers.IntegerField(min_value=1, default=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    modifiers = ModifierInputSerializer(many=True, required=False, default=list)


class DiscountInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=["percentage", "fixed"])
    value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))

    def validate(self, data):
        if data["type"] == "percentage" and data["value"] > 100:
            raise serializers.ValidationError({"value": "Percentage cannot be greater than 100."})
        return data


class OrderCreateSerializer(serializers.Serializer):
    order_type = serializers.ChoiceField(choices=Order.OrderType.choices, default=Order.OrderType.DINE_IN)
    payment_method = serializers.ChoiceField(
        choices=Order.PaymentMethod.choices, required=False, allow_blank=True, default=""
    )
    customer_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    customer_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = OrderItemInputSerializer(many=True, allow_empty=False)
    discount = DiscountInputSerializer(required=False, allow_null=True)
    coupon_code = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")

    def validate(self, data):
        if data.get("discount") and data.get("coupon_code"):
            raise serializers.ValidationError("Use either a manual discount or a coupon code, not both.")
        return data


class ReprintSerializer(serializers.Serializer):
    print_type = serializers.ChoiceField(choices=PRINT_TYPES, default=PRINT_BOTH)


# --- Output ---

class OrderItemModifierSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItemModifier
        fields = ["modifier_id", "name", "price"]


class OrderItemSerializer(serializers.ModelSerializer):
    modifiers = OrderItemModifierSerializer(many=True, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "name", "quantity", "unit_price", "total_price", "notes", "modifiers"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "order_type",
            "status",
            "payment_method",
            "customer_name",
            "customer_phone",
            "customer_email",
            "notes",
            "subtotal",
            "discount_amount",
            "discount_type",
            "discount_value",
            "coupon_code",
            "tax_rate",
            "tax_amount",
            "total",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
