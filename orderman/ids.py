"""
Orderman IDs — Tokens aleatórios para números de pedido.
"""

from __future__ import annotations

import secrets
import string


# Apenas maiúsculas: evita ambiguidade visual com minúsculas
ALPHANUMERIC_CHARS = string.ascii_uppercase + string.digits
NUMERIC_CHARS = string.digits


def generate_token(length: int, numeric_only: bool = False) -> str:
    """
    Gera token aleatório com fonte criptograficamente segura.

    Args:
        length: Número de caracteres do token
        numeric_only: Se True, usa apenas dígitos 0-9

    Returns:
        Token com exatamente `length` caracteres (A-Z0-9 ou 0-9)

    Raises:
        ValueError: Se length <= 0
    """
    if length <= 0:
        raise ValueError(f"Token length must be positive, got {length}")

    chars = NUMERIC_CHARS if numeric_only else ALPHANUMERIC_CHARS
    return "".join(secrets.choice(chars) for _ in range(length))
