"""
Criação de pedidos com número alocado.

Para sequential/date-based, a leitura da sequência, a verificação e o insert
do pedido acontecem na mesma transação. Para formatos aleatórios o insert
acontece logo após a verificação; violação da constraint unique gera novo
candidato.
"""

from __future__ import annotations

from orderman.models import Order, Outlet
from orderman.services.generator import GenerationConfig, OrderNumberGenerator, default_generator


def create_order(
    config: GenerationConfig,
    meta: dict | None = None,
    generator: OrderNumberGenerator | None = None,
) -> Order:
    """
    Aloca um número e cria o Order correspondente.

    Args:
        config: Configuração da geração
        meta: Metadados livres gravados no pedido
        generator: Gerador a usar (default: gerador padrão)

    Returns:
        Order criado, com order_number imutável.

    Raises:
        Mesmas exceções de OrderNumberGenerator.generate
    """
    generator = generator or default_generator

    def persist(outlet: Outlet, order_number: str, sequence: int) -> Order:
        return Order.objects.create(
            order_number=order_number,
            outlet=outlet,
            format=str(config.format),
            sequence=sequence,
            meta=meta or {},
        )

    _, order = generator.allocate(config, persist=persist)
    return order
