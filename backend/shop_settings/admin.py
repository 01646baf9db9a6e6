from django.contrib import admin
from .models import Printer, ShopSettings


@admin.register(ShopSettings)
class ShopSettingsAdmin(admin.ModelAdmin):
    fieldsets = (
        ("Shop", {"fields": ("shop_name", "address", "phone", "vat_number")}),
        ("Financial", {"fields": ("tax_rate", "currency", "currency_symbol")}),
        ("Receipt", {"fields": ("receipt_footer", "logo", "receipt_qr_url", "receipt_line_width")}),
    )

    def has_add_permission(self, request):
        # Only one ShopSettings row may exist
        return not ShopSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Printer)
class PrinterAdmin(admin.ModelAdmin):
    list_display = ("name", "role", "backend", "ip_address", "queue_name", "is_active")
    list_filter = ("role", "backend", "is_active")
    search_fields = ("name", "ip_address", "queue_name")
    fieldsets = (
        (None, {"fields": ("name", "role", "backend", "is_active", "line_width")}),
        ("Network", {"fields": ("ip_address", "port")}),
        ("USB", {"fields": ("usb_vendor_id", "usb_product_id")}),
        ("Queue / plugin", {"fields": ("queue_name", "plugin_url")}),
    )
