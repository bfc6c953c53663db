"""
Orderman Services.

- OrderNumberGenerator: Gera números de pedido únicos por loja
- create_order: Aloca número e cria o pedido na mesma operação
- diagnostics: Estatísticas, comparação e validação de formatos
"""

from orderman.services.diagnostics import (  # noqa: F401
    FormatComparison,
    FormatValidation,
    OutletStats,
    ParsedOrderNumber,
    analyze_order_number,
    compare_formats,
    generate_test_order_numbers,
    get_outlet_stats,
    is_valid_order_number,
    parse_order_number,
    validate_order_number_format,
)
from orderman.services.generator import (  # noqa: F401
    GenerationConfig,
    GenerationResult,
    OrderNumberGenerator,
    build_config,
    create_order_number,
    create_order_number_with_format,
    default_generator,
    generate_order_number,
    validate_config,
)
from orderman.services.orders import create_order  # noqa: F401
from orderman.services.outlets import outlet_segment, resolve_outlet  # noqa: F401
