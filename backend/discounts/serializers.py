from rest_framework import serializers

from .models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            "id",
            "code",
            "type",
            "value",
            "min_order_amount",
            "max_discount",
            "usage_limit",
            "usage_count",
            "starts_at",
            "expires_at",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["usage_count", "created_at", "updated_at"]

    def validate_code(self, value):
        code = value.strip().upper()
        queryset = Coupon.objects.filter(code=code)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A coupon with this code already exists.")
        return code

    def validate(self, data):
        coupon_type = data.get("type", getattr(self.instance, "type", None))
        value = data.get("value", getattr(self.instance, "value", None))
        if value is not None and value < 0:
            raise serializers.ValidationError({"value": "Value cannot be negative."})
        if coupon_type == Coupon.CouponType.PERCENTAGE and value is not None and value > 100:
            raise serializers.ValidationError({"value": "Percentage must be between 0 and 100."})

        starts_at = data.get("starts_at", getattr(self.instance, "starts_at", None))
        expires_at = data.get("expires_at", getattr(self.instance, "expires_at", None))
        if starts_at and expires_at and starts_at > expires_at:
            raise serializers.ValidationError("The start date cannot be after the expiry date.")
        return data


class CouponValidateSerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True, required=False, default="")
    order_total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
