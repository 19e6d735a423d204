"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los hosts de PuppetDB/Cobbler/Racktables y la lista de dominios dejan de
  ser constantes compiladas: se pueden sobreescribir por entorno o `.env`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from core import __version__
from core.domain.errors import ConfigurationError

DEFAULT_DOMAINS: list[str] = [".rc.fas.harvard.edu", ".rc.domain"]

# Orden de presentación por defecto.
DEFAULT_FACTS_TO_DISPLAY: list[str] = [
    "hostname",
    "born_on",
    "notes",
    "owner",
    "group",
    "docs",
    "rt",
    "manufacturer",
    "productname",
    "serialnumber",
    "operatingsystem",
    "operatingsystemrelease",
    "processor0",
    "processorcount",
    "memorytotal",
    "kernelrelease",
    "ipaddress",
    "macaddress",
    "vlan",
    "location_row",
    "location_rack",
    "location_ru",
    "uptime",
    "virtual",
]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "whatis"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "whatis"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "whatis"
    return Path.home() / ".config" / "whatis"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Las listas (`domains`, `default_facts`) se pasan como JSON en variables
    de entorno, p.ej. `WHATIS_DOMAINS='[".example.org"]'`.
    """

    model_config = SettingsConfigDict(
        env_prefix="WHATIS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    puppetdb_url: str = Field(
        default="http://pdb01.rc.fas.harvard.edu:8080",
        min_length=8,
        description="Base URL de PuppetDB (sin /pdb/query).",
    )
    cobbler_url: str = Field(
        default="https://cobbler.rc.fas.harvard.edu/cobbler_api",
        min_length=8,
        description="Endpoint XML-RPC de Cobbler.",
    )
    racktables_url: str = Field(
        default="https://racktables.rc.fas.harvard.edu",
        min_length=8,
        description="Base URL del servicio rackfacts de Racktables.",
    )
    domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DOMAINS),
        description="Sufijos DNS probados, en orden, para nombres sin dominio.",
    )
    default_facts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FACTS_TO_DISPLAY),
        description="Facts mostrados por defecto (sin --all).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request a PuppetDB/Cobbler (segundos).",
    )
    rack_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Timeout de Racktables; al expirar se ignora la fuente.",
    )
    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Tiempo máximo por consulta DNS (segundos).",
    )
    vnc_base_port: int = Field(
        default=5900,
        ge=1,
        le=65535,
        description="Puerto base al que se suma el offset VNC de cada VM.",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verificar certificados TLS de los backends.",
    )
    user_agent: str = Field(
        default=f"whatis/{__version__}",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )

    @field_validator("domains")
    @classmethod
    def _dotted_domains(cls, value: list[str]) -> list[str]:
        out: list[str] = []
        for domain in value:
            domain = domain.strip().lower()
            if not domain:
                continue
            out.append(domain if domain.startswith(".") else f".{domain}")
        return out


def load_settings() -> AppSettings:
    """`AppSettings()` con los errores de validación como `ConfigurationError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from exc
    except SettingsError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
