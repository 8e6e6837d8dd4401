"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/exportación) y servicios lean las fuentes
  de datos de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ubigeo_pe.core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ubigeo-pe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ubigeo-pe"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ubigeo-pe"
    return Path.home() / ".config" / "ubigeo-pe"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.

    Las fuentes (`*_source`) aceptan una URL `http(s)://` o una ruta local.
    """

    model_config = SettingsConfigDict(
        env_prefix="UBIGEO_PE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    hierarchy_source: str = Field(
        default="data/code_ubigeo_dep_prov_dis.json",
        min_length=1,
        description="Padrón jerárquico departamento → provincia → distrito.",
    )
    reniec_catalog_source: str = Field(
        default="data/ubigeo-reniec.json",
        min_length=1,
        description="Catálogo plano RENIEC.",
    )
    inei_catalog_source: str = Field(
        default="data/ubigeo-inei.json",
        min_length=1,
        description="Catálogo plano INEI.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="ubigeo-pe/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para descargar feeds remotos.",
    )

    collation_locale: str = Field(
        default="es",
        min_length=2,
        description="Locale de la colación usada para ordenar nombres.",
    )
    default_language: Language = Field(
        default_factory=Language.default,
        description="Idioma por defecto para mensajes de estado (en/es).",
    )

    export_dir: Path = Field(
        default=Path("dist"),
        description="Carpeta de salida de los bundles JSON estáticos.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING, ...).",
    )
