"""
Alocação de números de pedido à prova de colisão.

Duas disciplinas:

1. Sequencial (sequential, date-based): cada tentativa roda em
   `transaction.atomic()`: lê o último número do escopo, deriva a próxima
   sequência, confere existência exata e aceita. Colisão aborta a transação
   e a tentativa seguinte re-deriva a sequência do banco após backoff
   exponencial (2**k * RETRY_DELAY ms).
   Números de outro formato com o mesmo texto são pulados na própria
   tentativa.

2. Oportunista (random, random-numeric, compact-numeric, hybrid): gera,
   confere existência, aceita. Colisão gera novo candidato, até
   RANDOM_MAX_ATTEMPTS tentativas.

A sequência nunca é mantida em memória: com mais de um processo, um contador
local estaria errado.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from orderman.conf import get_orderman_setting
from orderman.exceptions import GenerationCancelled, GenerationExhausted, NumberCollision
from orderman.formats import parse_sequence
from orderman.models import Order


logger = logging.getLogger(__name__)


# persist(order_number, sequence) -> objeto persistido
Persist = Callable[[str, int], Any]


@dataclass(frozen=True)
class Allocation:
    """Número aceito pelo banco."""

    order_number: str
    sequence: int
    attempts: int
    persisted: Any = None


def number_exists(order_number: str) -> bool:
    """Verifica existência exata do número no banco."""
    return Order.objects.filter(order_number=order_number).exists()


def taken_by_other_format(order_number: str, fmt: str) -> bool:
    """
    Verifica se o número já pertence a um pedido de outro formato.

    Ex: random-numeric com 4 dígitos gera ORD-007-0001, o mesmo texto de um
    sequencial. Esses pedidos não entram em `latest_sequence`.
    """
    return Order.objects.filter(order_number=order_number).exclude(format__in=(fmt, "")).exists()


def latest_sequence(scope: str, fmt: str) -> int:
    """
    Última sequência emitida no escopo, ou 0.

    Considera apenas números `<scope><dígitos>` do mesmo formato (ou sem
    formato registrado), ordenados por criação.
    """
    last = (
        Order.objects.filter(order_number__regex=rf"^{re.escape(scope)}[0-9]+$")
        .filter(Q(format=fmt) | Q(format=""))
        .order_by("-created_at", "-id")
        .values_list("order_number", flat=True)
        .first()
    )
    return parse_sequence(last) if last else 0


def _check_deadline(deadline: datetime | None, fmt: str, attempts: int) -> None:
    if deadline is not None and timezone.now() >= deadline:
        logger.warning("Order number allocation cancelled: format=%s attempts=%s", fmt, attempts)
        raise GenerationCancelled(
            code="cancelled",
            message=f"Prazo expirado ao gerar número de pedido {fmt}",
            context={"format": fmt, "attempts": attempts},
        )


def _backoff(attempt: int, retry_delay: int) -> None:
    time.sleep((2 ** attempt) * retry_delay / 1000)


def allocate_sequence(
    fmt: str,
    scope: str,
    build: Callable[[int], str],
    *,
    persist: Persist | None = None,
    deadline: datetime | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> Allocation:
    """
    Aloca número sequencial dentro de transação.

    Args:
        fmt: Formato (para logs e erros)
        scope: Prefixo textual do escopo (ex: "ORD-007-")
        build: Monta o candidato a partir da sequência
        persist: Insere o pedido na mesma transação da verificação
        deadline: Prazo do chamador, conferido antes de cada tentativa
        max_retries: Limite de tentativas (default: MAX_RETRIES)
        retry_delay: Delay base do backoff em ms (default: RETRY_DELAY)

    Raises:
        GenerationExhausted: Colisão persistiu em todas as tentativas
        GenerationCancelled: Prazo expirou
    """
    if max_retries is None:
        max_retries = get_orderman_setting("MAX_RETRIES")
    if retry_delay is None:
        retry_delay = get_orderman_setting("RETRY_DELAY")
    last_error = ""

    for attempt in range(1, max_retries + 1):
        _check_deadline(deadline, fmt, attempt - 1)
        order_number = ""
        try:
            with transaction.atomic():
                sequence = latest_sequence(scope, fmt) + 1
                order_number = build(sequence)

                # Números de outro formato nunca avançam a sequência: pula
                while taken_by_other_format(order_number, fmt):
                    sequence += 1
                    order_number = build(sequence)

                # Outra transação pode ter gravado o mesmo número após a leitura
                if number_exists(order_number):
                    raise NumberCollision(order_number)

                persisted = persist(order_number, sequence) if persist else None

            return Allocation(order_number, sequence, attempt, persisted)

        except NumberCollision as e:
            last_error = e.message
        except IntegrityError as e:
            if not number_exists(order_number):
                raise
            last_error = str(e)

        logger.debug("Order number collision: format=%s candidate=%s attempt=%s", fmt, order_number, attempt)
        if attempt < max_retries:
            _backoff(attempt, retry_delay)

    logger.warning("Order number allocation exhausted: format=%s attempts=%s", fmt, max_retries)
    raise GenerationExhausted(fmt, max_retries, last_error)


def allocate_opportunistic(
    fmt: str,
    build: Callable[[], str],
    *,
    persist: Persist | None = None,
    deadline: datetime | None = None,
    max_attempts: int | None = None,
) -> Allocation:
    """
    Aloca número aleatório: gera, confere existência, aceita.

    Sem `persist` existe uma janela entre a verificação e o insert do
    chamador; a constraint unique de Order.order_number fecha essa janela
    quando o insert acontece via `persist`.

    Raises:
        GenerationExhausted: Todas as tentativas colidiram
        GenerationCancelled: Prazo expirou
    """
    if max_attempts is None:
        max_attempts = get_orderman_setting("RANDOM_MAX_ATTEMPTS")

    for attempt in range(1, max_attempts + 1):
        _check_deadline(deadline, fmt, attempt - 1)
        order_number = build()

        if number_exists(order_number):
            logger.debug("Order number collision: format=%s candidate=%s attempt=%s", fmt, order_number, attempt)
            continue

        if persist is None:
            return Allocation(order_number, 0, attempt)

        try:
            with transaction.atomic():
                persisted = persist(order_number, 0)
        except IntegrityError:
            if not number_exists(order_number):
                raise
            logger.debug("Order number insert race: format=%s candidate=%s attempt=%s", fmt, order_number, attempt)
            continue

        return Allocation(order_number, 0, attempt, persisted)

    logger.warning("Order number allocation exhausted: format=%s attempts=%s", fmt, max_attempts)
    raise GenerationExhausted(fmt, max_attempts)
