import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import CouponError, CouponNotFoundError, DiscountValidationError
from .filters import CouponFilter
from .models import Coupon
from .serializers import CouponSerializer, CouponValidateSerializer
from .services import CouponService

logger = logging.getLogger(__name__)


class CouponValidateView(APIView):
    """
    Check a coupon code against an order total without redeeming it.
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = CouponValidateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"success": False, "error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST
            )

        try:
            validated = CouponService.validate_code(
                serializer.validated_data["code"],
                serializer.validated_data["order_total"],
            )
        except DiscountValidationError as e:
            return Response(
                {"success": False, "error": str(e), "code": "invalid"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except CouponNotFoundError as e:
            return Response(
                {"success": False, "error": e.message, "code": e.code},
                status=status.HTTP_404_NOT_FOUND,
            )
        except CouponError as e:
            return Response(
                {"success": False, "error": e.message, "code": e.code},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"success": True, "data": validated.as_dict()}, status=status.HTTP_200_OK)


class CouponViewSet(viewsets.ModelViewSet):
    """
    Back-office management of coupons.
    Supports filtering by 'type' and 'is_active'.
    """

    queryset = Coupon.objects.all()
    serializer_class = CouponSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = CouponFilter
