from django.contrib import admin
from .models import Order, OrderItem, OrderItemModifier


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("name", "quantity", "unit_price", "total_price", "notes")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "order_type", "status", "payment_method", "total", "coupon_code", "created_at")
    list_filter = ("status", "order_type", "payment_method", "created_at")
    search_fields = ("order_number", "customer_name", "customer_phone", "coupon_code")
    readonly_fields = (
        "order_number",
        "subtotal",
        "discount_amount",
        "discount_type",
        "discount_value",
        "coupon_code",
        "tax_rate",
        "tax_amount",
        "total",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]


@admin.register(OrderItemModifier)
class OrderItemModifierAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "order_item")
