"""Construcción de la jerarquía canónica departamento → provincia → distrito.

This module turns the raw nested feed into frozen domain records plus the
lookup maps the repository serves from. Ids are never taken from the feed's
names: a district's code is the only source of truth, and provinces and
departments inherit their ids from their first (post-sort) child.

Entry-level anomalies are repaired here, silently:
- a district whose code normalizes to `000000` is dropped;
- a province (or department) left without children is not materialized;
- duplicate ids keep every record in the ordered sequence, and the lookup
  maps keep the last one registered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from ubigeo_pe.core.domain.models import Department, District, Province, RawDistrictEntry
from ubigeo_pe.core.errors import SourceMalformed
from ubigeo_pe.core.interfaces.collation import Collator
from ubigeo_pe.core.normalizers import (
    is_zero_code,
    normalize_code,
    normalize_name,
    normalize_optional_code,
)
from ubigeo_pe.core.services.collation import BaseCollator

logger = logging.getLogger(__name__)

RawHierarchy = dict[str, dict[str, dict[str, Any]]]

_RAW_HIERARCHY_ADAPTER = TypeAdapter(RawHierarchy)


@dataclass
class HierarchyIndex:
    """Resultado del builder: árbol ordenado + mapas de búsqueda."""

    departments: list[Department] = field(default_factory=list)
    departments_by_id: dict[str, Department] = field(default_factory=dict)
    provinces_by_id: dict[str, Province] = field(default_factory=dict)
    districts_by_id: dict[str, District] = field(default_factory=dict)
    districts_by_alternate_code: dict[str, District] = field(default_factory=dict)


def parse_raw_hierarchy(payload: Any, *, source: str = "<memory>") -> RawHierarchy:
    """Valida la forma de primer nivel (mapping de mappings de mappings).

    Lo que haya dentro de cada distrito no se valida aquí: una metadata rota
    se tolera y acaba filtrada por el código cero.
    """

    try:
        return _RAW_HIERARCHY_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise SourceMalformed(
            source,
            f"expected department -> province -> district mapping ({exc.error_count()} errors)",
        ) from exc


def build_district(raw_name: str, metadata: Any) -> District | None:
    """Mapea una entrada cruda a `District`, o `None` si su código es todo ceros."""

    entry = RawDistrictEntry.model_validate(metadata if isinstance(metadata, Mapping) else {})
    code = normalize_code(entry.code)
    if is_zero_code(code):
        return None

    return District(
        id=code,
        name=normalize_name(raw_name),
        department_id=code[:2],
        province_id=code[:4],
        alternate_code=normalize_optional_code(entry.alternate_code),
        external_entity_id=entry.external_entity_id,
    )


def build_hierarchy(
    raw: Mapping[str, Mapping[str, Mapping[str, Any]]],
    *,
    collator: Collator | None = None,
    source: str = "<memory>",
) -> HierarchyIndex:
    """Construye la jerarquía canónica a partir del feed crudo.

    Orden: distritos por nombre dentro de cada provincia, provincias por nombre
    dentro de cada departamento y departamentos por nombre, todos con la
    colación recibida (por defecto base-letter en español).
    """

    collator = collator or BaseCollator()
    raw = parse_raw_hierarchy(raw, source=source)
    index = HierarchyIndex()
    skipped = 0

    def by_name(record: Department | Province | District) -> str:
        return collator.sort_key(record.name)

    for department_name_raw, provinces_raw in raw.items():
        provinces: list[Province] = []

        for province_name_raw, districts_raw in provinces_raw.items():
            districts: list[District] = []
            for district_name_raw, metadata in districts_raw.items():
                district = build_district(district_name_raw, metadata)
                if district is None:
                    skipped += 1
                    logger.debug(
                        "Skipping district without code: %s / %s / %s",
                        department_name_raw,
                        province_name_raw,
                        district_name_raw,
                    )
                    continue
                districts.append(district)

            if not districts:
                continue
            districts.sort(key=by_name)

            first = districts[0]
            province = Province(
                id=first.province_id,
                name=normalize_name(province_name_raw),
                department_id=first.department_id,
                districts=tuple(districts),
            )
            provinces.append(province)

            for district in districts:
                index.districts_by_id[district.id] = district
                if district.alternate_code:
                    index.districts_by_alternate_code[district.alternate_code] = district
            index.provinces_by_id[province.id] = province

        if not provinces:
            continue
        provinces.sort(key=by_name)

        department = Department(
            id=provinces[0].department_id,
            name=normalize_name(department_name_raw),
            provinces=tuple(provinces),
        )
        index.departments.append(department)
        index.departments_by_id[department.id] = department

    index.departments.sort(key=by_name)

    logger.info(
        "Built hierarchy from %s: %d departments, %d provinces, %d districts (%d skipped)",
        source,
        len(index.departments),
        len(index.provinces_by_id),
        len(index.districts_by_id),
        skipped,
    )
    return index
