from __future__ import annotations

from django.db import models
from django.utils.translation import gettext_lazy as _

from orderman.formats import OrderNumberFormat


class Order(models.Model):
    """
    Pedido com número alocado (imutável).

    O `order_number` é gravado uma única vez na criação e nunca regenerado.
    Para criar um pedido com número alocado use `orderman.services.create_order`.
    """

    order_number = models.CharField(_("número do pedido"), max_length=64, unique=True)
    outlet = models.ForeignKey(
        "orderman.Outlet",
        verbose_name=_("loja"),
        on_delete=models.PROTECT,
        related_name="orders",
    )
    format = models.CharField(
        _("formato"),
        max_length=32,
        choices=OrderNumberFormat.choices,
        blank=True,
        default="",
    )
    sequence = models.PositiveIntegerField(_("sequência"), default=0)
    meta = models.JSONField(_("metadados"), default=dict, blank=True)

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True, db_index=True)

    class Meta:
        app_label = "orderman"
        verbose_name = _("pedido")
        verbose_name_plural = _("pedidos")
        ordering = ("-created_at", "-id")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._original_order_number = self.order_number

    def __str__(self) -> str:
        return self.order_number

    def save(self, *args, **kwargs):
        # Número do pedido é imutável depois de persistido
        if self.pk and self._original_order_number and self.order_number != self._original_order_number:
            from orderman.exceptions import ConfigurationError

            raise ConfigurationError(
                code="immutable_order_number",
                message=f"Número do pedido não pode ser alterado: {self._original_order_number}",
                context={
                    "current": self._original_order_number,
                    "requested": self.order_number,
                },
            )

        super().save(*args, **kwargs)
        self._original_order_number = self.order_number
