"""
Orderman API Views — Geração, diagnóstico e criação de pedidos.

Mapeamento de erros:
    ConfigurationError  -> 400 (corrigir a requisição)
    OutletNotFound      -> 404 (corrigir a loja)
    GenerationExhausted -> 503 (contenção transitória, reenviar)
    GenerationCancelled -> 503
"""

from __future__ import annotations

import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import APIException, NotFound, ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle

from orderman.conf import get_orderman_setting
from orderman.exceptions import ConfigurationError, OrdermanError, OutletNotFound
from orderman.formats import FORMAT_RECOMMENDATIONS, get_all_formats, recommend_format
from orderman.models import Order, Outlet
from orderman.services import (
    analyze_order_number,
    build_config,
    compare_formats,
    create_order,
    generate_order_number,
    get_outlet_stats,
    validate_order_number_format,
)

from .serializers import (
    FormatComparisonSerializer,
    FormatValidationSerializer,
    GenerationConfigSerializer,
    GenerationResultSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    OutletSerializer,
    OutletStatsSerializer,
)


logger = logging.getLogger(__name__)


class AllocationUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Não foi possível alocar um número de pedido agora. Tente novamente."
    default_code = "allocation_unavailable"


def _raise_api_error(e: OrdermanError):
    payload = {"code": e.code, "message": e.message, "context": e.context}
    if isinstance(e, OutletNotFound):
        raise NotFound(payload)
    if isinstance(e, ConfigurationError):
        raise DRFValidationError(payload)
    if e.retryable:
        payload["message"] = f"{AllocationUnavailable.default_detail} ({e.message})"
        raise AllocationUnavailable(payload)
    raise DRFValidationError(payload)


def _config_from(validated: dict):
    fields = {k: v for k, v in validated.items() if k not in ("outlet_id", "format", "meta")}
    return build_config(validated["outlet_id"], validated.get("format"), **fields)


class OrdermanPermissionsMixin:
    """Permissões configuráveis via ORDERMAN["DEFAULT_PERMISSION_CLASSES"]."""

    def get_permissions(self):
        return [permission() for permission in get_orderman_setting("DEFAULT_PERMISSION_CLASSES")]


class OrderNumberViewSet(OrdermanPermissionsMixin, viewsets.ViewSet):
    """
    Endpoints:
        POST /api/order-numbers - Gera número (não cria pedido)
        GET  /api/order-numbers/validate?value=X - Validação estrutural
        GET  /api/order-numbers/analyze?value=X - Parsing e validação
    """

    throttle_classes = [AnonRateThrottle, UserRateThrottle]

    def create(self, request):
        s = GenerationConfigSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            result = generate_order_number(_config_from(s.validated_data))
        except OrdermanError as e:
            _raise_api_error(e)

        return Response(GenerationResultSerializer(result).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path="validate")
    def validate(self, request):
        value = request.query_params.get("value", "")
        prefix = request.query_params.get("prefix", "ORD")
        validation = validate_order_number_format(value, prefix=prefix)
        return Response(FormatValidationSerializer(validation).data)

    @action(detail=False, methods=["get"], url_path="analyze")
    def analyze(self, request):
        value = request.query_params.get("value", "")
        prefix = request.query_params.get("prefix", "ORD")
        return Response(analyze_order_number(value, prefix=prefix))


class FormatViewSet(OrdermanPermissionsMixin, viewsets.ViewSet):
    """
    Endpoints:
        GET /api/formats - Catálogo de formatos
        GET /api/formats/recommend?business_size=&concurrency_level=&security_priority=
    """

    def list(self, request):
        return Response(get_all_formats())

    @action(detail=False, methods=["get"], url_path="recommend")
    def recommend(self, request):
        params = request.query_params
        fmt = recommend_format(
            params.get("business_size", "small"),
            params.get("concurrency_level", "low"),
            params.get("security_priority", "low"),
        )
        return Response({"format": fmt.value, "profiles": FORMAT_RECOMMENDATIONS})


class OutletViewSet(OrdermanPermissionsMixin, viewsets.ReadOnlyModelViewSet):
    """
    Endpoints:
        GET /api/outlets
        GET /api/outlets/{public_id}
        GET /api/outlets/{public_id}/stats - Estatísticas de pedidos
        GET /api/outlets/{public_id}/compare - Um candidato por formato
    """

    queryset = Outlet.objects.all()
    serializer_class = OutletSerializer
    lookup_field = "public_id"
    lookup_value_regex = r"\d+"

    @action(detail=True, methods=["get"], url_path="stats")
    def stats(self, request, public_id=None):
        outlet = self.get_object()
        return Response(OutletStatsSerializer(get_outlet_stats(outlet.public_id)).data)

    @action(detail=True, methods=["get"], url_path="compare")
    def compare(self, request, public_id=None):
        outlet = self.get_object()
        comparisons = compare_formats(outlet.public_id)
        return Response(FormatComparisonSerializer(comparisons, many=True).data)


class OrderViewSet(
    OrdermanPermissionsMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Endpoints:
        GET  /api/orders?outlet_id=X
        GET  /api/orders/{order_number}
        POST /api/orders - Aloca número e cria o pedido

    O número do pedido é imutável: não há update.
    """

    queryset = Order.objects.select_related("outlet").all()
    serializer_class = OrderSerializer
    lookup_field = "order_number"
    throttle_classes = [AnonRateThrottle, UserRateThrottle]

    def get_queryset(self):
        qs = super().get_queryset()
        outlet_id = self.request.query_params.get("outlet_id")
        if outlet_id and outlet_id.isdigit():
            qs = qs.filter(outlet__public_id=outlet_id)
        return qs

    def create(self, request, *args, **kwargs):
        s = OrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = create_order(_config_from(s.validated_data), meta=s.validated_data.get("meta"))
        except OrdermanError as e:
            logger.info("Order creation failed: %s (%s)", e.code, e.message)
            _raise_api_error(e)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
