from django_filters import rest_framework as filters

from .models import Coupon


class CouponFilter(filters.FilterSet):
    class Meta:
        model = Coupon
        fields = {
            "type": ["exact"],
            "is_active": ["exact"],
        }
