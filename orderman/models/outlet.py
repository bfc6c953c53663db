from __future__ import annotations

from django.db import models
from django.utils.translation import gettext_lazy as _


class Outlet(models.Model):
    """
    Loja (ponto de venda físico ou lógico) de um lojista.

    `public_id` é o identificador estável embutido em todo número de pedido,
    com padding de 3 dígitos (ex: 7 -> "007").
    """

    public_id = models.PositiveIntegerField(_("ID público"), unique=True)
    name = models.CharField(_("nome"), max_length=128, blank=True, default="")
    is_active = models.BooleanField(_("ativo"), default=True)

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)

    class Meta:
        app_label = "orderman"
        verbose_name = _("loja")
        verbose_name_plural = _("lojas")
        ordering = ("public_id",)
        constraints = [
            models.CheckConstraint(
                condition=models.Q(public_id__gt=0),
                name="outlet_public_id_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.name or f"#{self.public_id}"

    @property
    def segment(self) -> str:
        """Segmento da loja no número do pedido (ex: "007")."""
        return str(self.public_id).zfill(3)
