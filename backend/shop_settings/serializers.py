from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from pricing.money import CURRENCY_EXPONENT
from .models import Printer, ShopSettings


class ShopSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShopSettings
        fields = [
            "shop_name",
            "address",
            "phone",
            "vat_number",
            "tax_rate",
            "currency",
            "currency_symbol",
            "receipt_footer",
            "logo",
            "receipt_qr_url",
            "receipt_line_width",
            "updated_at",
        ]
        read_only_fields = ["updated_at"]

    def validate_currency(self, value):
        value = value.upper()
        if value not in CURRENCY_EXPONENT:
            raise serializers.ValidationError(f"Unsupported currency '{value}'.")
        return value


class PrinterSerializer(serializers.ModelSerializer):
    class Meta:
        model = Printer
        fields = [
            "id",
            "name",
            "role",
            "backend",
            "ip_address",
            "port",
            "usb_vendor_id",
            "usb_product_id",
            "queue_name",
            "plugin_url",
            "line_width",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, data):
        # Run the model's backend checks against the merged instance state
        instance = Printer(**{**self._current_values(), **data})
        try:
            instance.clean()
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return data

    def _current_values(self):
        if self.instance is None:
            return {}
        return {
            field: getattr(self.instance, field)
            for field in self.Meta.fields
            if field not in self.Meta.read_only_fields
        }
