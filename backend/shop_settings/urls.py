from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import PrinterViewSet, ShopSettingsView

router = SimpleRouter()
router.register(r"printers", PrinterViewSet, basename="printer")

urlpatterns = [
    path("shop/", ShopSettingsView.as_view(), name="shop-settings"),
    path("", include(router.urls)),
]
