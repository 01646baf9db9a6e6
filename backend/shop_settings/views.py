import logging

from rest_framework import permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Printer, ShopSettings
from .serializers import PrinterSerializer, ShopSettingsSerializer

logger = logging.getLogger(__name__)


class ShopSettingsView(APIView):
    """
    The single ShopSettings object. Any signed-in user can read it;
    only staff can change it.
    """

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.IsAuthenticated()]
        return [permissions.IsAdminUser()]

    def get(self, request, *args, **kwargs):
        serializer = ShopSettingsSerializer(ShopSettings.load())
        return Response(serializer.data, status=status.HTTP_200_OK)

    def patch(self, request, *args, **kwargs):
        instance = ShopSettings.load()
        serializer = ShopSettingsSerializer(instance, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response({"success": False, "error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        serializer.save()
        logger.info(f"Shop settings updated by {request.user}: {sorted(request.data.keys())}")
        return Response(serializer.data, status=status.HTTP_200_OK)


class PrinterViewSet(viewsets.ModelViewSet):
    queryset = Printer.objects.all()
    serializer_class = PrinterSerializer
    permission_classes = [permissions.IsAdminUser]
