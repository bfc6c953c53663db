"""
Diagnóstico de números de pedido.

Leitura apenas: estatísticas por loja, comparação de formatos, validação
estrutural e análise de números. Nada aqui aloca números, exceto
`generate_test_order_numbers`, que cria pedidos de teste explicitamente.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone as dt_timezone

from django.utils import timezone

from orderman.exceptions import OrdermanError
from orderman.formats import OrderNumberFormat
from orderman.models import Order
from orderman.services.generator import GenerationConfig, OrderNumberGenerator, default_generator
from orderman.services.orders import create_order
from orderman.services.outlets import resolve_outlet


@dataclass(frozen=True)
class OutletStats:
    total_orders: int
    today_orders: int
    last_order_number: str | None = None
    last_order_at: datetime | None = None


@dataclass(frozen=True)
class FormatComparison:
    format: str
    order_number: str | None = None
    sequence: int | None = None
    length: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class FormatValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedOrderNumber:
    prefix: str
    outlet_id: int
    format: str
    date: str | None = None
    sequence: int | None = None
    random: str | None = None


# =============================================================================
# Estatísticas
# =============================================================================


def get_outlet_stats(outlet_id: int) -> OutletStats:
    """
    Estatísticas de pedidos de uma loja.

    "Hoje" é o dia UTC corrente, o mesmo dia usado no segmento de data.

    Raises:
        OutletNotFound: Se a loja não existe
    """
    outlet = resolve_outlet(outlet_id)

    today = timezone.now().astimezone(dt_timezone.utc).date()
    start = datetime.combine(today, time.min, tzinfo=dt_timezone.utc)
    end = start + timedelta(days=1)

    orders = Order.objects.filter(outlet=outlet)
    last = orders.order_by("-created_at", "-id").values("order_number", "created_at").first()

    return OutletStats(
        total_orders=orders.count(),
        today_orders=orders.filter(created_at__gte=start, created_at__lt=end).count(),
        last_order_number=last["order_number"] if last else None,
        last_order_at=last["created_at"] if last else None,
    )


# =============================================================================
# Comparação de formatos
# =============================================================================


def compare_formats(outlet_id: int, generator: OrderNumberGenerator | None = None) -> list[FormatComparison]:
    """
    Gera um candidato por formato, sem verificar unicidade nem persistir.

    Erros de geração são reportados por formato, nunca levantados.
    """
    generator = generator or default_generator
    results = []

    for fmt in OrderNumberFormat:
        try:
            candidate, sequence = generator.preview(GenerationConfig(format=fmt, outlet_id=outlet_id))
        except OrdermanError as e:
            results.append(FormatComparison(format=fmt.value, error=e.message))
            continue
        results.append(
            FormatComparison(
                format=fmt.value,
                order_number=candidate,
                sequence=sequence,
                length=len(candidate),
            )
        )

    return results


# =============================================================================
# Validação e parsing
# =============================================================================


def validate_order_number_format(order_number: str, prefix: str = "ORD") -> FormatValidation:
    """
    Confere a estrutura de um número de pedido (auditoria de dados).

    Regras: prefixo correto, ao menos 3 segmentos separados por hífen e
    segmento da loja numérico e positivo. Números compact-numeric (sem
    hífens) são reconhecidos pelo padrão PREFIX + 3 dígitos da loja + dígitos.
    """
    errors: list[str] = []
    suggestions: list[str] = []

    if not order_number:
        errors.append("Order number cannot be empty")
        return FormatValidation(is_valid=False, errors=errors, suggestions=suggestions)

    compact = re.fullmatch(rf"{re.escape(prefix)}(\d{{3}})(\d+)", order_number)
    if compact:
        if int(compact.group(1)) < 1:
            errors.append("Outlet ID must be a positive number")
            suggestions.append(f"Use format: {prefix}00112345 (where 001 is outlet ID)")
        else:
            suggestions.append("Order number format is valid")
        return FormatValidation(is_valid=not errors, errors=errors, suggestions=suggestions)

    if not order_number.startswith(f"{prefix}-"):
        errors.append(f'Order number must start with "{prefix}-"')
        suggestions.append(f"Use format: {prefix}-{{outletId}}-{{sequence}}")

    parts = order_number.split("-")
    if len(parts) < 3:
        errors.append("Order number must have at least 3 parts separated by hyphens")
        suggestions.append(f"Use format: {prefix}-{{outletId}}-{{sequence}}")

    if len(parts) >= 2:
        outlet_part = parts[1]
        if not outlet_part.isdigit() or int(outlet_part) < 1:
            errors.append("Outlet ID must be a positive number")
            suggestions.append(f"Use format: {prefix}-001-0001 (where 001 is outlet ID)")

    if not errors:
        suggestions.append("Order number format is valid")

    return FormatValidation(is_valid=not errors, errors=errors, suggestions=suggestions)


def _patterns(prefix: str) -> list[tuple[str, re.Pattern]]:
    p = re.escape(prefix)
    return [
        (OrderNumberFormat.COMPACT_NUMERIC, re.compile(rf"^(?P<prefix>{p})(?P<outlet>\d{{3}})(?P<random>\d{{5}})$")),
        (OrderNumberFormat.SEQUENTIAL, re.compile(rf"^(?P<prefix>{p})-(?P<outlet>\d{{3,}})-(?P<sequence>\d{{1,20}})$")),
        (OrderNumberFormat.RANDOM, re.compile(rf"^(?P<prefix>{p})-(?P<outlet>\d{{3,}})-(?P<random>[A-Z0-9]{{4,20}})$")),
        (
            OrderNumberFormat.DATE_BASED,
            re.compile(rf"^(?P<prefix>{p})-(?P<outlet>\d{{3,}})-(?P<date>\d{{8}})-(?P<sequence>\d{{1,10}})$"),
        ),
        (
            OrderNumberFormat.HYBRID,
            re.compile(rf"^(?P<prefix>{p})-(?P<outlet>\d{{3,}})-(?P<date>\d{{8}})-(?P<random>[A-Z0-9]{{4}})$"),
        ),
    ]


def parse_order_number(order_number: str, prefix: str = "ORD") -> ParsedOrderNumber | None:
    """
    Extrai os componentes de um número de pedido.

    Segmentos finais só com dígitos são lidos como sequência (sequential /
    date-based); random-numeric é indistinguível de sequential.

    Returns:
        ParsedOrderNumber ou None se o número não segue nenhum formato.
    """
    for fmt, pattern in _patterns(prefix):
        match = pattern.match(order_number or "")
        if not match:
            continue
        groups = match.groupdict()
        sequence = groups.get("sequence")
        return ParsedOrderNumber(
            prefix=groups["prefix"],
            outlet_id=int(groups["outlet"]),
            format=fmt.value,
            date=groups.get("date"),
            sequence=int(sequence) if sequence is not None else None,
            random=groups.get("random"),
        )
    return None


def is_valid_order_number(order_number: str, prefix: str = "ORD") -> bool:
    return parse_order_number(order_number, prefix) is not None


def analyze_order_number(order_number: str, prefix: str = "ORD") -> dict:
    """Combina validação estrita, parsing e validação estrutural."""
    parsed = parse_order_number(order_number, prefix)
    validation = validate_order_number_format(order_number, prefix)
    return {
        "order_number": order_number,
        "is_valid": parsed is not None,
        "format": parsed.format if parsed else "unknown",
        "outlet_id": parsed.outlet_id if parsed else None,
        "date": parsed.date if parsed else None,
        "sequence": parsed.sequence if parsed else None,
        "random": parsed.random if parsed else None,
        "errors": validation.errors,
        "suggestions": validation.suggestions,
    }


# =============================================================================
# Dados de teste
# =============================================================================


def generate_test_order_numbers(outlet_id: int, count: int, fmt: str = OrderNumberFormat.SEQUENTIAL) -> list[str]:
    """Cria `count` pedidos de teste e retorna seus números."""
    return [
        create_order(GenerationConfig(format=fmt, outlet_id=outlet_id), meta={"test": True}).order_number
        for _ in range(count)
    ]
