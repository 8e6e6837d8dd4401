"""Cargador de feeds JSON (padrón jerárquico y catálogos).

Este módulo vive en `core/` porque:
- centraliza *de dónde* salen los datos (URL o archivo local) sin acoplarse a la CLI
- traduce fallos de transporte/parseo a los errores del Core, una sola vez.

No incluye datasets en el repo; se apuntan por configuración (`UBIGEO_PE_*_SOURCE`).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from ubigeo_pe.adapters.http_client import build_async_client
from ubigeo_pe.core.config import AppSettings, get_user_config_dir
from ubigeo_pe.core.errors import SourceMalformed, SourceUnavailable

logger = logging.getLogger(__name__)


def _project_root() -> Path:
    # core/resources_loader.py -> core -> ubigeo_pe -> src -> <project_root>
    return Path(__file__).resolve().parents[3]


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def resolve_local_source(source: str) -> Path:
    """Busca un feed local en ubicaciones comunes.

    Orden:
    1) la ruta tal cual (absoluta o relativa al cwd)
    2) <project_root>/<source>
    3) <user_config_dir>/<source>

    Si no existe en ninguna, devuelve la ruta tal cual (el lector fallará con
    `SourceUnavailable`).
    """

    path = Path(source).expanduser()
    if path.is_absolute():
        return path

    candidates = [
        Path.cwd() / path,
        _project_root() / path,
        get_user_config_dir() / path,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return path


def _decode(source: str, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SourceMalformed(source, f"invalid JSON: {exc.msg} at line {exc.lineno}") from exc


async def _fetch_remote(source: str, client: httpx.AsyncClient) -> str:
    try:
        response = await client.get(source)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise SourceUnavailable(source, str(exc) or exc.__class__.__name__) from exc
    return response.text


async def load_json_source(
    source: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> Any:
    """Lee un feed JSON desde una URL o una ruta local.

    Errores:
    - `SourceUnavailable`: red, HTTP != 2xx, archivo inexistente/ilegible.
    - `SourceMalformed`: el contenido no es UTF-8 o no es JSON válido.

    Sin reintentos: un fallo se propaga al caller.
    """

    if is_remote(source):
        if client is not None:
            text = await _fetch_remote(source, client)
        else:
            async with build_async_client(settings) as own_client:
                text = await _fetch_remote(source, own_client)
    else:
        path = resolve_local_source(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceUnavailable(source, exc.strerror or str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise SourceMalformed(source, f"not valid UTF-8 at byte {exc.start}") from exc

    logger.info("Loaded %s (%d bytes)", source, len(text))
    return _decode(source, text)
