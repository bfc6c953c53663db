from __future__ import annotations

from django.http import JsonResponse
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import FormatViewSet, OrderNumberViewSet, OrderViewSet, OutletViewSet


def health_check(request):
    """
    Healthcheck endpoint para monitoramento.

    Returns:
        200 OK com {"status": "healthy", "version": "X.X.X"}
    """
    from orderman import __version__

    return JsonResponse({
        "status": "healthy",
        "version": __version__,
    })


router = DefaultRouter(trailing_slash=False)
router.register("order-numbers", OrderNumberViewSet, basename="order-numbers")
router.register("formats", FormatViewSet, basename="formats")
router.register("outlets", OutletViewSet, basename="outlets")
router.register("orders", OrderViewSet, basename="orders")

urlpatterns = [
    path("health", health_check, name="health-check"),
    path("", include(router.urls)),
]
