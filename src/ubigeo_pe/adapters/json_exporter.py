"""Exportación JSON estática (bundles por departamento/provincia/distrito).

Por qué JSON:
- Permite servir la jerarquía como archivos estáticos, sin backend.
- Todo sale de los accesores del repositorio: aquí no se recalcula ningún id
  ni orden.

Estructura de salida (`<out>/data/`):
- hierarchy.json                lista `{id, name}` de departamentos
- departments/<id>.json         departamento + provincias
- provinces/<id>.json           departamento + provincia + distritos
- districts/<id>.json           departamento + provincia + distrito
- reverse/<estándar>.json       código → ids, por RENIEC e INEI
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from ubigeo_pe.core.domain.models import Department, District, Province
from ubigeo_pe.core.errors import UnknownEntity
from ubigeo_pe.core.services.repository import HierarchyRepository

logger = logging.getLogger(__name__)


def _write_json(root: Path, relative_path: str, payload: Any) -> Path:
    target = root / relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return target


def summarize_department(department: Department) -> dict[str, str]:
    return {"id": department.id, "name": department.name}


def summarize_province(province: Province) -> dict[str, str]:
    return {"id": province.id, "name": province.name, "departmentId": province.department_id}


def summarize_district(district: District) -> dict[str, Any]:
    return {
        "id": district.id,
        "name": district.name,
        "provinceId": district.province_id,
        "departmentId": district.department_id,
        "inei": district.alternate_code,
        "entityId": district.external_entity_id,
    }


def department_bundle(repository: HierarchyRepository, department_id: str) -> dict[str, Any]:
    department = repository.get_department_by_id(department_id)
    if department is None:
        raise UnknownEntity("department", department_id)
    return {
        "department": summarize_department(department),
        "provinces": [summarize_province(p) for p in repository.get_provinces_by_department(department_id)],
    }


def province_bundle(repository: HierarchyRepository, province_id: str) -> dict[str, Any]:
    province = repository.get_province_by_id(province_id)
    if province is None:
        raise UnknownEntity("province", province_id)
    department = repository.get_department_by_id(province.department_id)
    if department is None:
        raise UnknownEntity("department", province.department_id)
    return {
        "department": summarize_department(department),
        "province": {"id": province.id, "name": province.name},
        "districts": [summarize_district(d) for d in repository.get_districts_by_province(province_id)],
    }


def district_bundle(repository: HierarchyRepository, district_id: str) -> dict[str, Any]:
    match = repository.lookup_by_primary_code(district_id)
    if match is None:
        raise UnknownEntity("district", district_id)
    return {
        "department": summarize_department(match.department),
        "province": {"id": match.province.id, "name": match.province.name},
        "district": summarize_district(match.district),
    }


def reverse_lookup(repository: HierarchyRepository) -> dict[str, dict[str, dict[str, str]]]:
    """Código → ids de la jerarquía, uno por estándar soportado."""

    reniec: dict[str, dict[str, str]] = {}
    inei: dict[str, dict[str, str]] = {}
    for district in repository.iter_districts():
        ids = {
            "departmentId": district.department_id,
            "provinceId": district.province_id,
            "districtId": district.id,
        }
        reniec[district.id] = ids
        if district.alternate_code:
            inei[district.alternate_code] = ids
    return {"reniec": reniec, "inei": inei}


def export_static_bundles(*, repository: HierarchyRepository, output_dir: Path) -> Path:
    """Regenera `<output_dir>/data` con todos los bundles; devuelve esa carpeta."""

    data_root = output_dir / "data"
    if data_root.exists():
        shutil.rmtree(data_root)
    data_root.mkdir(parents=True, exist_ok=True)

    departments = repository.get_departments()
    _write_json(data_root, "hierarchy.json", [summarize_department(d) for d in departments])

    written = 1
    for department in departments:
        _write_json(data_root, f"departments/{department.id}.json", department_bundle(repository, department.id))
        written += 1
        for province in repository.get_provinces_by_department(department.id):
            _write_json(data_root, f"provinces/{province.id}.json", province_bundle(repository, province.id))
            written += 1
            for district in province.districts:
                _write_json(data_root, f"districts/{district.id}.json", district_bundle(repository, district.id))
                written += 1

    for standard, table in reverse_lookup(repository).items():
        _write_json(data_root, f"reverse/{standard}.json", table)
        written += 1

    logger.info("Wrote %d bundles to %s", written, data_root)
    return data_root
