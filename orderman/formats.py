"""
Formatos de número de pedido.

Cada formato monta um *candidato* a partir do segmento da loja, do prefixo e
de parâmetros próprios. Montar um candidato não garante unicidade: isso é
responsabilidade do alocador (`orderman.services.allocation`).

Formatos:
- sequential:      ORD-007-0001
- date-based:      ORD-007-20250115-0001 (sequência reinicia por dia UTC)
- random:          ORD-007-A7B9C2
- random-numeric:  ORD-007-123456
- compact-numeric: ORD00712345 (sem hífens, 5 dígitos)
- hybrid:          ORD-007-20250115-A7B9
"""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from django.db import models
from django.utils.translation import gettext_lazy as _

from orderman.ids import generate_token


class OrderNumberFormat(models.TextChoices):
    SEQUENTIAL = "sequential", _("sequencial")
    DATE_BASED = "date-based", _("por data")
    RANDOM = "random", _("aleatório")
    RANDOM_NUMERIC = "random-numeric", _("aleatório numérico")
    COMPACT_NUMERIC = "compact-numeric", _("compacto numérico")
    HYBRID = "hybrid", _("híbrido")


# Alocação transacional (sequência derivada do banco)
SEQUENCE_FORMATS = frozenset({OrderNumberFormat.SEQUENTIAL, OrderNumberFormat.DATE_BASED})

# Alocação oportunista (gera, verifica, aceita)
OPPORTUNISTIC_FORMATS = frozenset({
    OrderNumberFormat.RANDOM,
    OrderNumberFormat.RANDOM_NUMERIC,
    OrderNumberFormat.COMPACT_NUMERIC,
    OrderNumberFormat.HYBRID,
})

COMPACT_TOKEN_LENGTH = 5
HYBRID_TOKEN_LENGTH = 4


# =============================================================================
# Segmentos
# =============================================================================


def date_segment(moment: datetime) -> str:
    """Data UTC no formato YYYYMMDD."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt_timezone.utc)
    return moment.strftime("%Y%m%d")


def sequence_scope(prefix: str, outlet_segment: str, moment: datetime | None = None) -> str:
    """
    Prefixo textual do escopo de uma sequência.

    Sem `moment`: "ORD-007-" (sequential). Com `moment`: "ORD-007-20250115-"
    (date-based).
    """
    if moment is None:
        return f"{prefix}-{outlet_segment}-"
    return f"{prefix}-{outlet_segment}-{date_segment(moment)}-"


def parse_sequence(order_number: str) -> int:
    """Retorna o segmento numérico final do número ou 0 se não for numérico."""
    tail = order_number.rsplit("-", 1)[-1]
    return int(tail) if tail.isdigit() else 0


# =============================================================================
# Candidatos
# =============================================================================


def build_sequential(prefix: str, outlet_segment: str, sequence: int, sequence_length: int) -> str:
    return f"{sequence_scope(prefix, outlet_segment)}{str(sequence).zfill(sequence_length)}"


def build_date_based(
    prefix: str,
    outlet_segment: str,
    moment: datetime,
    sequence: int,
    sequence_length: int,
) -> str:
    return f"{sequence_scope(prefix, outlet_segment, moment)}{str(sequence).zfill(sequence_length)}"


def build_random(prefix: str, outlet_segment: str, random_length: int, numeric_only: bool = False) -> str:
    return f"{prefix}-{outlet_segment}-{generate_token(random_length, numeric_only)}"


def build_compact_numeric(prefix: str, outlet_segment: str) -> str:
    return f"{prefix}{outlet_segment}{generate_token(COMPACT_TOKEN_LENGTH, numeric_only=True)}"


def build_hybrid(prefix: str, outlet_segment: str, moment: datetime, numeric_only: bool = False) -> str:
    token = generate_token(HYBRID_TOKEN_LENGTH, numeric_only)
    return f"{prefix}-{outlet_segment}-{date_segment(moment)}-{token}"


# =============================================================================
# Catálogo
# =============================================================================


FORMAT_INFO = {
    OrderNumberFormat.SEQUENTIAL: {
        "description": "Sequential numbering per outlet",
        "example": "ORD-001-0001",
        "pros": ["Outlet identification", "Easy tracking", "Human readable"],
        "cons": ["Business intelligence leakage", "Race conditions possible"],
        "best_for": "Small to medium businesses with low concurrency",
    },
    OrderNumberFormat.DATE_BASED: {
        "description": "Date-based with daily sequence reset",
        "example": "ORD-001-20250115-0001",
        "pros": ["Daily organization", "Better security", "Easy daily reporting"],
        "cons": ["Longer numbers", "Still somewhat predictable"],
        "best_for": "Medium businesses with daily operations focus",
    },
    OrderNumberFormat.RANDOM: {
        "description": "Random alphanumeric strings for security",
        "example": "ORD-001-A7B9C2",
        "pros": ["Maximum security", "No race conditions", "Unpredictable"],
        "cons": ["No sequence tracking", "Harder to manage", "No business insights"],
        "best_for": "Large businesses prioritizing security",
    },
    OrderNumberFormat.RANDOM_NUMERIC: {
        "description": "Random numeric strings for security",
        "example": "ORD-001-123456",
        "pros": ["Maximum security", "No race conditions", "Numbers only", "Unpredictable"],
        "cons": ["No sequence tracking", "Harder to manage", "No business insights"],
        "best_for": "Businesses needing numeric-only random order numbers",
    },
    OrderNumberFormat.COMPACT_NUMERIC: {
        "description": "Compact format with outlet ID and 5-digit random number",
        "example": "ORD00112345",
        "pros": ["Compact format", "Outlet identification", "Numbers only", "Short length"],
        "cons": ["No sequence tracking", "Limited randomness (5 digits)"],
        "best_for": "Businesses wanting compact, numeric-only order numbers",
    },
    OrderNumberFormat.HYBRID: {
        "description": "Combines outlet, date, and random elements",
        "example": "ORD-001-20250115-A7B9",
        "pros": ["Balanced security", "Outlet identification", "Date organization"],
        "cons": ["Longer numbers", "More complex"],
        "best_for": "Large businesses needing both security and organization",
    },
}

FORMAT_RECOMMENDATIONS = {
    "small_business": {
        "recommended": OrderNumberFormat.SEQUENTIAL,
        "reason": "Simple, easy to track, low concurrency needs",
        "example": "ORD-001-0001",
    },
    "medium_business": {
        "recommended": OrderNumberFormat.DATE_BASED,
        "reason": "Better organization, daily reporting, moderate security",
        "example": "ORD-001-20250115-0001",
    },
    "large_business": {
        "recommended": OrderNumberFormat.HYBRID,
        "reason": "Balanced security and organization, high volume",
        "example": "ORD-001-20250115-A7B9",
    },
    "high_security": {
        "recommended": OrderNumberFormat.RANDOM,
        "reason": "Maximum security, no business intelligence leakage",
        "example": "ORD-001-A7B9C2",
    },
}


def get_format_info(fmt: str) -> dict | None:
    """Retorna informações de exibição de um formato ou None se desconhecido."""
    if fmt not in OrderNumberFormat.values:
        return None
    return FORMAT_INFO[OrderNumberFormat(fmt)]


def get_all_formats() -> list[dict]:
    """Retorna todos os formatos com suas informações."""
    return [{"format": fmt.value, "label": str(fmt.label), **info} for fmt, info in FORMAT_INFO.items()]


def recommend_format(business_size: str, concurrency_level: str, security_priority: str) -> OrderNumberFormat:
    """
    Recomenda um formato a partir do perfil do negócio.

    Args:
        business_size: "small" | "medium" | "large"
        concurrency_level: "low" | "medium" | "high"
        security_priority: "low" | "medium" | "high"
    """
    if business_size == "small" and concurrency_level == "low" and security_priority == "low":
        return OrderNumberFormat.COMPACT_NUMERIC

    if business_size == "medium" or security_priority == "medium":
        return OrderNumberFormat.DATE_BASED

    if concurrency_level == "high" or security_priority == "high":
        return OrderNumberFormat.RANDOM_NUMERIC

    if business_size == "large":
        return OrderNumberFormat.HYBRID

    return OrderNumberFormat.COMPACT_NUMERIC
