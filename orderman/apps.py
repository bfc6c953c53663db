"""
Django AppConfig para orderman.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class OrdermanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orderman"
    label = "orderman"
    verbose_name = _("Números de Pedido")
