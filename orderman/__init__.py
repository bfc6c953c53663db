"""
Django Orderman — Números de pedido únicos por loja (outlet).

Uso básico:
    from orderman.services import GenerationConfig, generate_order_number

    result = generate_order_number(GenerationConfig(format="sequential", outlet_id=7))
    result.order_number  # "ORD-007-0001"

Para criar o pedido na mesma transação da alocação:
    from orderman.services import create_order
"""

__title__ = "Django Orderman"
__version__ = "0.1.0"
__author__ = "Orderman Contributors"
