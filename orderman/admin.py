from __future__ import annotations

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from unfold.admin import ModelAdmin
from unfold.decorators import display

from .models import Order, Outlet
from .services import get_outlet_stats


@admin.register(Outlet)
class OutletAdmin(ModelAdmin):
    list_display = ["public_id", "name", "segment_display", "is_active", "created_at"]
    list_filter = ("is_active",)
    search_fields = ("name", "public_id")
    ordering = ("public_id",)
    list_filter_submit = True
    compressed_fields = True

    fieldsets = (
        (_("Identidade"), {"fields": ("public_id", "name", "is_active"), "classes": ("tab",)}),
        (_("Pedidos"), {"fields": ("stats_display",), "classes": ("tab",)}),
        (_("Auditoria"), {"fields": ("created_at",), "classes": ("tab",)}),
    )
    readonly_fields = ("created_at", "stats_display")

    def get_readonly_fields(self, request, obj=None):
        # public_id é embutido nos números já emitidos
        if obj:
            return (*self.readonly_fields, "public_id")
        return self.readonly_fields

    @display(description=_("segmento"))
    def segment_display(self, obj: Outlet) -> str:
        return obj.segment

    @display(description=_("estatísticas"))
    def stats_display(self, obj: Outlet) -> str:
        if not obj or not obj.pk:
            return "-"
        stats = get_outlet_stats(obj.public_id)
        last = stats.last_order_number or "-"
        return _("%(total)s pedidos, %(today)s hoje, último: %(last)s") % {
            "total": stats.total_orders,
            "today": stats.today_orders,
            "last": last,
        }


@admin.register(Order)
class OrderAdmin(ModelAdmin):
    """Pedidos são criados via API/serviço; o número nunca é editado no admin."""

    list_display = ["order_number", "outlet", "format", "sequence", "created_at"]
    list_filter = ("format", "outlet")
    search_fields = ("order_number",)
    ordering = ("-created_at", "-id")
    list_select_related = ("outlet",)
    readonly_fields = ("order_number", "outlet", "format", "sequence", "created_at")
    fields = ("order_number", "outlet", "format", "sequence", "meta", "created_at")

    def has_add_permission(self, request) -> bool:
        return False
