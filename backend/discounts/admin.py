from django.contrib import admin
from .models import Coupon, CouponRedemption


class CouponRedemptionInline(admin.TabularInline):
    model = CouponRedemption
    extra = 0
    readonly_fields = ("order_id", "redeemed_at")
    can_delete = False


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    """
    Admin interface for managing coupons.
    """

    list_display = (
        "code",
        "type",
        "value",
        "usage_count",
        "usage_limit",
        "is_active",
        "starts_at",
        "expires_at",
    )
    list_filter = ("type", "is_active")
    search_fields = ("code",)
    ordering = ("code",)
    readonly_fields = ("usage_count", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("code", "is_active")}),
        ("Rule", {"fields": ("type", "value", "max_discount", "min_order_amount")}),
        ("Usage", {"fields": ("usage_limit", "usage_count")}),
        ("Timeframe", {"fields": ("starts_at", "expires_at")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )
    inlines = [CouponRedemptionInline]
