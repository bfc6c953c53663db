from __future__ import annotations

from django.conf import settings
from django.utils.module_loading import import_string


ORDERMAN_DEFAULTS = {
    # Formato padrão para novos pedidos
    "FORMAT": "compact-numeric",
    "PREFIX": "ORD",
    # Largura do padding da sequência (sequential / date-based)
    "SEQUENCE_LENGTH": 4,
    # Tamanho do token aleatório (random / random-numeric)
    "RANDOM_LENGTH": 6,
    # Tentativas da alocação transacional e delay base do backoff (ms)
    "MAX_RETRIES": 5,
    "RETRY_DELAY": 10,
    # Tentativas da alocação oportunista (formatos aleatórios)
    "RANDOM_MAX_ATTEMPTS": 10,
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
}


def get_orderman_setting(key: str):
    """Retrieve an Orderman setting, falling back to ORDERMAN_DEFAULTS."""
    user_settings = getattr(settings, "ORDERMAN", {})
    value = user_settings.get(key, ORDERMAN_DEFAULTS.get(key))
    if key.endswith("_CLASSES") and isinstance(value, list) and value and isinstance(value[0], str):
        return [import_string(cls) for cls in value]
    return value


def validate_orderman_settings(overrides: dict | None = None) -> list[str]:
    """
    Valida a configuração de numeração.

    Args:
        overrides: Valores a validar no lugar dos settings atuais

    Returns:
        Lista de erros (vazia se a configuração é válida)
    """
    overrides = overrides or {}

    def value(key: str):
        return overrides.get(key, get_orderman_setting(key))

    errors: list[str] = []

    if not value("PREFIX"):
        errors.append("Prefix cannot be empty")

    if not 1 <= value("SEQUENCE_LENGTH") <= 10:
        errors.append("Sequence length must be between 1 and 10")

    if not 4 <= value("RANDOM_LENGTH") <= 20:
        errors.append("Random length must be between 4 and 20")

    if not 1 <= value("MAX_RETRIES") <= 20:
        errors.append("Max retries must be between 1 and 20")

    if not 1 <= value("RETRY_DELAY") <= 1000:
        errors.append("Retry delay must be between 1 and 1000 milliseconds")

    if not 1 <= value("RANDOM_MAX_ATTEMPTS") <= 100:
        errors.append("Random max attempts must be between 1 and 100")

    return errors
