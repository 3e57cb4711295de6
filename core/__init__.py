# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades criptográficas del paquete core.
# --------------------------------------------------------------
"""Inicializa el paquete `core` y documenta sus módulos principales."""

__all__ = [
    "classify",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "digest",
    "errors",
    "locator",
    "logging_config",
    "models",
    "protocol",
    "publish",
]
