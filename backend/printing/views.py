import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.models import Order
from orders.services import OrderService
from shop_settings.config import app_settings
from .exceptions import PrintingError
from .serializers import PrintJobResultSerializer, PrintReceiptSerializer
from .services import get_printer_status, open_cash_drawer, print_order_sync, simulated_target
from .transports import list_printers, print_queue

logger = logging.getLogger(__name__)


class PrintReceiptView(APIView):
    """
    Print (or reprint) an order's customer receipt and/or kitchen docket.

    Responds 200 even when a printer fails; per-document outcomes are in
    the body.
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = PrintReceiptSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = Order.objects.prefetch_related("items__modifiers").get(
                pk=serializer.validated_data["order_id"]
            )
        except Order.DoesNotExist:
            return Response({"success": False, "error": "Order not found"}, status=status.HTTP_404_NOT_FOUND)

        results = print_order_sync(
            OrderService.build_printable_order(order),
            app_settings.get_shop_details(),
            serializer.validated_data["print_type"],
            app_settings.get_print_targets(),
        )
        return Response(
            {
                "success": all(r.success for r in results),
                "results": PrintJobResultSerializer(results, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class PrinterStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, *args, **kwargs):
        targets = app_settings.get_printer_targets()
        if not targets:
            return Response(
                {"success": True, "printers": [], "message": "No printer configured"},
                status=status.HTTP_200_OK,
            )
        printers = [get_printer_status(target) for target in targets]
        return Response({"success": True, "printers": printers}, status=status.HTTP_200_OK)


class SystemPrinterListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, *args, **kwargs):
        try:
            printers = list_printers()
        except PrintingError as e:
            return Response({"success": False, "error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({"success": True, "printers": printers}, status=status.HTTP_200_OK)


class PrintQueueView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, *args, **kwargs):
        try:
            jobs = print_queue()
        except PrintingError as e:
            return Response({"success": False, "error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({"success": True, "jobs": jobs}, status=status.HTTP_200_OK)


class OpenCashDrawerView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        targets = app_settings.get_printer_targets("receipt")
        target = targets[0] if targets else simulated_target("customer")
        try:
            result = open_cash_drawer(target)
        except PrintingError as e:
            return Response({"success": False, "error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Cash drawer requested by {request.user} on '{target.name}'")
        return Response(result.as_dict(), status=status.HTTP_200_OK)
