from rest_framework import serializers

from .renderers import PRINT_TYPES


class PrintReceiptSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    print_type = serializers.ChoiceField(choices=PRINT_TYPES, default="both")


class PrintJobResultSerializer(serializers.Serializer):
    kind = serializers.CharField()
    printer = serializers.CharField()
    success = serializers.BooleanField()
    error = serializers.CharField(allow_null=True)
    error_code = serializers.CharField(allow_null=True)
