import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from discounts.exceptions import CouponError, CouponNotFoundError, DiscountValidationError
from printing.serializers import PrintJobResultSerializer
from printing.services import print_order_sync
from .exceptions import OrderValidationError
from .models import Order
from .serializers import OrderCreateSerializer, OrderSerializer, ReprintSerializer
from .services import OrderService

logger = logging.getLogger(__name__)


def get_order(pk):
    return Order.objects.prefetch_related("items__modifiers").filter(pk=pk).first()


class OrderCreateView(APIView):
    """
    Create an order from a cart. Open to the storefront as well as the
    terminal; the cashier is recorded when the request is authenticated.
    """

    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = OrderService.create_order(serializer.validated_data, user=request.user)
        except CouponError as e:
            status_code = status.HTTP_404_NOT_FOUND if isinstance(e, CouponNotFoundError) else status.HTTP_400_BAD_REQUEST
            return Response({"success": False, "error": e.message, "code": e.code}, status=status_code)
        except (OrderValidationError, DiscountValidationError) as e:
            return Response({"success": False, "error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {"success": True, "data": OrderSerializer(get_order(order.pk)).data},
            status=status.HTTP_201_CREATED,
        )


class OrderDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk, *args, **kwargs):
        order = get_order(pk)
        if order is None:
            return Response({"success": False, "error": "Order not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "data": OrderSerializer(order).data}, status=status.HTTP_200_OK)


class OrderReprintView(APIView):
    """Print an existing order again and report each printer's outcome."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk, *args, **kwargs):
        from shop_settings.config import app_settings

        serializer = ReprintSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        order = get_order(pk)
        if order is None:
            return Response({"success": False, "error": "Order not found"}, status=status.HTTP_404_NOT_FOUND)

        results = print_order_sync(
            OrderService.build_printable_order(order),
            app_settings.get_shop_details(),
            serializer.validated_data["print_type"],
            app_settings.get_print_targets(),
        )
        logger.info(f"Order #{order.order_number} reprinted by {request.user}")
        return Response(
            {
                "success": all(r.success for r in results),
                "results": PrintJobResultSerializer(results, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
