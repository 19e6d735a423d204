"""Taxonomía de errores de whatis.

Solo `InputError`, `ConfigurationError`, `ResolutionError` y
`NoInformationError` llegan al usuario (exit 1). `SourceUnavailableError`
la absorbe el pipeline y se convierte en un aviso, distinto de "la fuente no tiene datos".
"""

from __future__ import annotations


class WhatisError(Exception):
    """Base de los errores propios."""


class InputError(WhatisError):
    """Argumentos de CLI ausentes, sobrantes o incompatibles."""


class ConfigurationError(WhatisError):
    """Variables `WHATIS_*` o `.env` con valores inválidos."""


class ResolutionError(WhatisError):
    """La resolución inversa de una IP no devolvió un nombre utilizable."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Unable to resolve {address} to a hostname")
        self.address = address


class SourceUnavailableError(WhatisError):
    """Un backend no respondió (red, timeout, respuesta corrupta)."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source} unavailable: {reason}")
        self.source = source
        self.reason = reason


class NoInformationError(WhatisError):
    """Ninguna fuente tiene información del host."""

    def __init__(self, host: str, unavailable: list[str] | None = None) -> None:
        self.host = host
        self.unavailable = list(unavailable or [])
        message = "No information for this host in Puppet, Cobbler, or Racktables."
        if self.unavailable:
            message += f" Unreachable: {', '.join(self.unavailable)}."
        super().__init__(message)
