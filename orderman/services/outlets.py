"""
Resolução de lojas (outlets).
"""

from __future__ import annotations

from orderman.exceptions import ConfigurationError, OutletNotFound
from orderman.models import Outlet


def resolve_outlet(outlet_id) -> Outlet:
    """
    Busca a loja pelo ID público.

    Raises:
        ConfigurationError: Se outlet_id não é inteiro positivo
        OutletNotFound: Se a loja não existe (fatal, não retentar)
    """
    if isinstance(outlet_id, bool) or not isinstance(outlet_id, int) or outlet_id < 1:
        raise ConfigurationError(
            code="invalid_outlet_id",
            message=f"ID da loja deve ser inteiro positivo: {outlet_id!r}",
            context={"outlet_id": outlet_id},
        )

    try:
        return Outlet.objects.get(public_id=outlet_id)
    except Outlet.DoesNotExist:
        raise OutletNotFound(outlet_id)


def outlet_segment(outlet_id) -> str:
    """Resolve a loja e retorna seu segmento com padding (ex: 7 -> "007")."""
    return resolve_outlet(outlet_id).segment
