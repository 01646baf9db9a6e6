from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serial_port import list_serial_ports


class SerialPortListView(APIView):
    """Serial ports the customer display can be attached to."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({"success": True, "ports": list_serial_ports()}, status=status.HTTP_200_OK)
