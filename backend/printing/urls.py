from django.urls import path

from .views import (
    OpenCashDrawerView,
    PrintQueueView,
    PrintReceiptView,
    PrinterStatusView,
    SystemPrinterListView,
)

urlpatterns = [
    path("receipt/", PrintReceiptView.as_view(), name="print-receipt"),
    path("status/", PrinterStatusView.as_view(), name="printer-status"),
    path("printers/", SystemPrinterListView.as_view(), name="system-printers"),
    path("queue/", PrintQueueView.as_view(), name="print-queue"),
    path("drawer/", OpenCashDrawerView.as_view(), name="open-cash-drawer"),
]
