from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from ubigeo_pe.core.services.catalog_index import CatalogIndex
from ubigeo_pe.core.services.repository import HierarchyRepository

# Padrón con los defectos típicos del feed real: mayúsculas, espacios de más,
# códigos sin padding, códigos en cero y un departamento sin ningún distrito válido.
RAW_HIERARCHY: dict = {
    "LIMA": {
        "LIMA": {
            "SAN  ISIDRO": {"ubigeo": "150131", "inei": "150131", "id": 1292},
            "MIRAFLORES": {"ubigeo": "150122", "inei": "150140", "id": 1283},
            "ATE": {"ubigeo": "150103", "inei": "150103", "id": 1264},
        },
        "HUAURA": {
            "SAYAN": {"ubigeo": "150811", "inei": "150811"},
            "HUACHO": {"ubigeo": "150801", "inei": "150801"},
        },
        "SIN DISTRITOS": {
            "FANTASMA": {"ubigeo": "000000"},
        },
    },
    "  áncash ": {
        "HUARAZ": {
            "INDEPENDENCIA": {"ubigeo": "20105", "inei": "020105"},
            "HUARAZ": {"ubigeo": "020101", "inei": "0"},
        },
    },
    "PUNO": {
        "MELGAR": {
            "ÑUÑOA": {"ubigeo": "210809", "inei": "210809"},
            "NUEVO SAN JUAN": {"ubigeo": "210810"},
            "MACARI": {"ubigeo": "210805", "inei": "210805"},
        },
    },
    "AMAZONAS": {
        "CHACHAPOYAS": {
            "CHACHAPOYAS": {"ubigeo": "010101", "inei": "010101"},
        },
    },
    "SIN CODIGO": {
        "NADA": {
            "NADA": {"ubigeo": ""},
            "ROTO": "no es un objeto",
        },
    },
}

RENIEC_ROWS: list[dict] = [
    {"departamento": "15", "provincia": "01", "distrito": "00", "nombre": "LIMA"},
    {"departamento": "15", "provincia": "01", "distrito": "22", "nombre": "MIRAFLORES"},
    {"departamento": "15", "provincia": "01", "distrito": "31", "nombre": "SAN ISIDRO"},
    {"departamento": 2, "provincia": 1, "distrito": 1, "nombre": "huaraz"},
    {"departamento": "99", "provincia": "99", "distrito": "99", "nombre": "NO SINCRONIZADO"},
]

INEI_ROWS: list[dict] = [
    {"departamento": "15", "provincia": "01", "distrito": "40", "nombre": "MIRAFLORES"},
    {"departamento": "15", "provincia": "08", "distrito": "00"},
    {"departamento": "15", "provincia": "08", "distrito": "01", "nombre": "HUACHO"},
]


def counting_transport(calls: list[str], payload, status_code: int = 200) -> httpx.MockTransport:
    """Transporte HTTP falso que anota cada URL pedida."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return httpx.MockTransport(handler)


@pytest.fixture
def raw_hierarchy() -> dict:
    return json.loads(json.dumps(RAW_HIERARCHY))


@pytest.fixture
def repository(raw_hierarchy: dict) -> HierarchyRepository:
    return HierarchyRepository.from_raw(raw_hierarchy)


@pytest.fixture
def reniec_index() -> CatalogIndex:
    return CatalogIndex.from_rows(RENIEC_ROWS, label="RENIEC")


@pytest.fixture
def inei_index() -> CatalogIndex:
    return CatalogIndex.from_rows(INEI_ROWS, label="INEI")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Feeds escritos a disco, como los encontraría la CLI."""

    root = tmp_path / "data"
    root.mkdir()
    (root / "code_ubigeo_dep_prov_dis.json").write_text(
        json.dumps(RAW_HIERARCHY, ensure_ascii=False), encoding="utf-8"
    )
    (root / "ubigeo-reniec.json").write_text(json.dumps(RENIEC_ROWS), encoding="utf-8")
    (root / "ubigeo-inei.json").write_text(json.dumps(INEI_ROWS), encoding="utf-8")
    return root
