from __future__ import annotations

from rest_framework import serializers

from orderman.formats import OrderNumberFormat
from orderman.models import Order, Outlet


class OutletSerializer(serializers.ModelSerializer):
    segment = serializers.CharField(read_only=True)

    class Meta:
        model = Outlet
        fields = ("id", "public_id", "name", "segment", "is_active", "created_at")


class OrderSerializer(serializers.ModelSerializer):
    outlet_id = serializers.IntegerField(source="outlet.public_id", read_only=True)

    class Meta:
        model = Order
        fields = ("id", "order_number", "outlet_id", "format", "sequence", "meta", "created_at")
        read_only_fields = fields


class GenerationConfigSerializer(serializers.Serializer):
    """
    POST /api/order-numbers

    Campos omitidos usam os settings ORDERMAN.
    """

    format = serializers.ChoiceField(choices=OrderNumberFormat.choices, required=False)
    outlet_id = serializers.IntegerField(min_value=1)
    prefix = serializers.CharField(required=False, max_length=16)
    sequence_length = serializers.IntegerField(required=False)
    random_length = serializers.IntegerField(required=False)
    numeric_only = serializers.BooleanField(required=False, default=False)


class OrderCreateSerializer(GenerationConfigSerializer):
    """
    POST /api/orders

    Aloca o número e cria o pedido na mesma operação.
    """

    meta = serializers.JSONField(required=False, default=dict)


class GenerationResultSerializer(serializers.Serializer):
    order_number = serializers.CharField()
    sequence = serializers.IntegerField()
    generated_at = serializers.DateTimeField()
    format = serializers.CharField()
    outlet_id = serializers.IntegerField()
    attempts = serializers.IntegerField()


class OutletStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    today_orders = serializers.IntegerField()
    last_order_number = serializers.CharField(allow_null=True)
    last_order_at = serializers.DateTimeField(allow_null=True)


class FormatComparisonSerializer(serializers.Serializer):
    format = serializers.CharField()
    order_number = serializers.CharField(allow_null=True)
    sequence = serializers.IntegerField(allow_null=True)
    length = serializers.IntegerField(allow_null=True)
    error = serializers.CharField(allow_null=True)


class FormatValidationSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    errors = serializers.ListField(child=serializers.CharField())
    suggestions = serializers.ListField(child=serializers.CharField())
