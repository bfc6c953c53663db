"""
OrderNumberGenerator — Ponto de entrada para geração de números de pedido.

Pipeline:
1. Validar configuração (antes de qualquer acesso ao banco)
2. Resolver a loja (fatal se não existir)
3. Despachar para o alocador do formato
4. Retornar GenerationResult
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from django.utils import timezone

from orderman import formats
from orderman.conf import get_orderman_setting
from orderman.exceptions import ConfigurationError
from orderman.formats import OrderNumberFormat
from orderman.models import Outlet
from orderman.services.allocation import Allocation, allocate_opportunistic, allocate_sequence, latest_sequence
from orderman.services.outlets import resolve_outlet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    """
    Configuração de uma geração (não persistida).

    Campos None usam os settings ORDERMAN (PREFIX, SEQUENCE_LENGTH, RANDOM_LENGTH).
    """

    format: str
    outlet_id: int
    prefix: str | None = None
    sequence_length: int | None = None
    random_length: int | None = None
    numeric_only: bool = False
    deadline: datetime | None = None

    def with_defaults(self) -> GenerationConfig:
        return dataclasses.replace(
            self,
            prefix=get_orderman_setting("PREFIX") if self.prefix is None else self.prefix,
            sequence_length=get_orderman_setting("SEQUENCE_LENGTH") if self.sequence_length is None else self.sequence_length,
            random_length=get_orderman_setting("RANDOM_LENGTH") if self.random_length is None else self.random_length,
        )


@dataclass(frozen=True)
class GenerationResult:
    """Número aceito. `sequence` é 0 para formatos sem sequência."""

    order_number: str
    sequence: int
    generated_at: datetime
    format: str = ""
    outlet_id: int | None = None
    attempts: int = 1


def validate_config(config: GenerationConfig) -> GenerationConfig:
    """
    Valida a configuração e aplica defaults.

    Raises:
        ConfigurationError: Formato desconhecido, prefixo ou comprimentos inválidos
    """
    if config.format not in OrderNumberFormat.values:
        raise ConfigurationError(
            code="unknown_format",
            message=f"Formato de número de pedido não suportado: {config.format}",
            context={"format": config.format, "supported": list(OrderNumberFormat.values)},
        )

    config = config.with_defaults()
    fmt = OrderNumberFormat(config.format)

    if not isinstance(config.prefix, str) or not config.prefix.isalnum():
        raise ConfigurationError(
            code="invalid_prefix",
            message=f"Prefixo deve ser alfanumérico e não vazio: {config.prefix!r}",
            context={"prefix": config.prefix},
        )

    if fmt in formats.SEQUENCE_FORMATS and not 1 <= config.sequence_length <= 10:
        raise ConfigurationError(
            code="invalid_length",
            message="Sequence length must be between 1 and 10",
            context={"sequence_length": config.sequence_length},
        )

    if fmt in (OrderNumberFormat.RANDOM, OrderNumberFormat.RANDOM_NUMERIC) and not 4 <= config.random_length <= 20:
        raise ConfigurationError(
            code="invalid_length",
            message="Random length must be between 4 and 20",
            context={"random_length": config.random_length},
        )

    return dataclasses.replace(config, format=fmt)


class OrderNumberGenerator:
    """
    Gera números de pedido únicos por loja.

    Uso:
        generator = OrderNumberGenerator()
        result = generator.generate(GenerationConfig(format="sequential", outlet_id=7))

    `clock` permite fixar o instante de geração (data dos formatos date-based
    e hybrid).
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or timezone.now

    def generate(self, config: GenerationConfig) -> GenerationResult:
        """
        Gera um número de pedido único.

        Raises:
            ConfigurationError: Configuração inválida
            OutletNotFound: Loja não existe
            GenerationExhausted: Limite de tentativas atingido
            GenerationCancelled: Prazo do chamador expirou
        """
        result, _ = self.allocate(config)
        return result

    def allocate(
        self,
        config: GenerationConfig,
        persist: Callable[[Outlet, str, int], Any] | None = None,
    ) -> tuple[GenerationResult, Any]:
        """
        Como `generate`, mas executa `persist(outlet, order_number, sequence)`
        junto da alocação e retorna também o objeto persistido.

        Para formatos sequenciais o insert roda na mesma transação da leitura
        da sequência.
        """
        config = validate_config(config)
        outlet = resolve_outlet(config.outlet_id)
        moment = self.clock()

        bound_persist = functools.partial(persist, outlet) if persist else None

        allocation = self._dispatch(config, outlet.segment, moment, bound_persist)

        result = GenerationResult(
            order_number=allocation.order_number,
            sequence=allocation.sequence,
            generated_at=self.clock(),
            format=config.format.value,
            outlet_id=outlet.public_id,
            attempts=allocation.attempts,
        )
        logger.debug(
            "Order number allocated: %s (format=%s, attempts=%s)",
            result.order_number,
            result.format,
            result.attempts,
        )
        return result, allocation.persisted

    def preview(self, config: GenerationConfig) -> tuple[str, int]:
        """
        Monta um candidato sem verificar unicidade nem persistir.

        Usado pelo comparador de formatos. Retorna (candidato, sequência).
        """
        config = validate_config(config)
        segment = resolve_outlet(config.outlet_id).segment
        moment = self.clock()
        fmt = config.format

        if fmt in formats.SEQUENCE_FORMATS:
            scope = self._scope(config, segment, moment)
            sequence = latest_sequence(scope, fmt) + 1
            return self._sequence_builder(config, segment, moment)(sequence), sequence

        return self._random_builder(config, segment, moment)(), 0

    # ------------------------------------------------------------------ internals

    def _dispatch(self, config: GenerationConfig, segment: str, moment: datetime, persist) -> Allocation:
        fmt = config.format

        if fmt in formats.SEQUENCE_FORMATS:
            return allocate_sequence(
                fmt.value,
                self._scope(config, segment, moment),
                self._sequence_builder(config, segment, moment),
                persist=persist,
                deadline=config.deadline,
            )

        return allocate_opportunistic(
            fmt.value,
            self._random_builder(config, segment, moment),
            persist=persist,
            deadline=config.deadline,
        )

    @staticmethod
    def _scope(config: GenerationConfig, segment: str, moment: datetime) -> str:
        if config.format == OrderNumberFormat.DATE_BASED:
            return formats.sequence_scope(config.prefix, segment, moment)
        return formats.sequence_scope(config.prefix, segment)

    @staticmethod
    def _sequence_builder(config: GenerationConfig, segment: str, moment: datetime) -> Callable[[int], str]:
        if config.format == OrderNumberFormat.DATE_BASED:
            return lambda seq: formats.build_date_based(config.prefix, segment, moment, seq, config.sequence_length)
        return lambda seq: formats.build_sequential(config.prefix, segment, seq, config.sequence_length)

    @staticmethod
    def _random_builder(config: GenerationConfig, segment: str, moment: datetime) -> Callable[[], str]:
        fmt = config.format
        if fmt == OrderNumberFormat.RANDOM_NUMERIC:
            return lambda: formats.build_random(config.prefix, segment, config.random_length, numeric_only=True)
        if fmt == OrderNumberFormat.COMPACT_NUMERIC:
            return lambda: formats.build_compact_numeric(config.prefix, segment)
        if fmt == OrderNumberFormat.HYBRID:
            return lambda: formats.build_hybrid(config.prefix, segment, moment, config.numeric_only)
        return lambda: formats.build_random(config.prefix, segment, config.random_length, config.numeric_only)


# Instância padrão
default_generator = OrderNumberGenerator()


def generate_order_number(config: GenerationConfig) -> GenerationResult:
    """Gera número de pedido com o gerador padrão."""
    return default_generator.generate(config)


def build_config(outlet_id: int, fmt: str | None = None, **overrides) -> GenerationConfig:
    """Monta GenerationConfig com o formato padrão (setting FORMAT) se `fmt` omitido."""
    return GenerationConfig(format=fmt or get_orderman_setting("FORMAT"), outlet_id=outlet_id, **overrides)


def create_order_number(outlet_id: int) -> str:
    """Número sequencial com configuração padrão. Retorna apenas a string."""
    return generate_order_number(GenerationConfig(format=OrderNumberFormat.SEQUENTIAL, outlet_id=outlet_id)).order_number


def create_order_number_with_format(outlet_id: int, fmt: str) -> GenerationResult:
    """Gera número no formato indicado com prefixo e comprimentos padrão."""
    return generate_order_number(GenerationConfig(format=fmt, outlet_id=outlet_id))
