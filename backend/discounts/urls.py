from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import CouponViewSet, CouponValidateView

router = SimpleRouter()
router.register(r"", CouponViewSet, basename="coupon")

urlpatterns = [
    path("validate/", CouponValidateView.as_view(), name="coupon-validate"),
    path("", include(router.urls)),
]
