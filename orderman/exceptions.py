"""
Orderman Exceptions — Exceções da geração de números de pedido.

Todas as exceções seguem o padrão:
- code: Código máquina do erro (ex.: "outlet_not_found", "unknown_format")
- message: Mensagem legível para humanos
- context: Dados adicionais sobre o erro

`retryable` indica se reenviar a mesma requisição pode dar certo
(contenção transitória) ou se o chamador precisa corrigir a entrada.
"""

from __future__ import annotations


class OrdermanError(Exception):
    """
    Classe base para todas as exceções do Orderman.

    Attributes:
        code: Código máquina do erro
        message: Mensagem legível para humanos
        context: Dados adicionais sobre o erro
    """

    retryable = False

    def __init__(self, code: str = "error", message: str = "", context: dict | None = None):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ConfigurationError(OrdermanError):
    """
    Configuração de geração inválida. Nunca é retentada.

    Codes: "unknown_format", "invalid_length", "invalid_prefix", "invalid_outlet_id"
    """


class OutletNotFound(OrdermanError):
    """
    Loja não existe. Fatal: retentar não resolve.

    Codes: "outlet_not_found"
    """

    def __init__(self, outlet_id, message: str = ""):
        super().__init__(
            code="outlet_not_found",
            message=message or f"Loja não encontrada: {outlet_id}",
            context={"outlet_id": outlet_id},
        )
        self.outlet_id = outlet_id


class NumberCollision(OrdermanError):
    """
    Candidato já existe no banco.

    Transitório: absorvido pelo alocador, nunca chega ao chamador.
    """

    def __init__(self, order_number: str):
        super().__init__(
            code="collision",
            message=f"Colisão de número de pedido: {order_number}",
            context={"order_number": order_number},
        )
        self.order_number = order_number


class GenerationExhausted(OrdermanError):
    """
    Colisões persistiram além do limite de tentativas.

    Codes: "retries_exhausted"
    """

    retryable = True

    def __init__(self, fmt: str, attempts: int, last_error: str = ""):
        message = f"Falha ao gerar número de pedido {fmt} após {attempts} tentativas"
        if last_error:
            message = f"{message}: {last_error}"
        super().__init__(
            code="retries_exhausted",
            message=message,
            context={"format": fmt, "attempts": attempts},
        )
        self.attempts = attempts


class GenerationCancelled(OrdermanError):
    """
    Prazo do chamador expirou antes da próxima tentativa.

    Codes: "cancelled"
    """

    retryable = True
