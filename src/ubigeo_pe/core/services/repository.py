"""Repositorio en memoria de la jerarquía UBIGEO.

Por qué una instancia explícita (y no un caché global de módulo):
- El caller decide cuántos repositorios existen y de qué fuente sale cada uno.
- La carga es single-flight por fuente: varias llamadas concurrentes a
  `bootstrap()` comparten una sola descarga y un solo parseo.

Aislamiento:
- Los registros son modelos Pydantic congelados con hijos en tuplas, así que
  nadie puede mutarlos. Los accesores que devuelven listas construyen una
  lista nueva en cada llamada.
- Antes de `bootstrap()` (o tras una carga fallida) el repositorio se comporta
  como un modelo vacío: `[]` y `None`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ubigeo_pe.core.config import AppSettings
from ubigeo_pe.core.domain.models import Department, District, LookupResult, Province
from ubigeo_pe.core.interfaces.collation import Collator
from ubigeo_pe.core.normalizers import normalize_code
from ubigeo_pe.core.resources_loader import load_json_source
from ubigeo_pe.core.services.collation import BaseCollator
from ubigeo_pe.core.services.hierarchy_builder import HierarchyIndex, build_hierarchy
from ubigeo_pe.core.services.single_flight import SingleFlight

logger = logging.getLogger(__name__)


class HierarchyRepository:
    """Dueño del árbol canónico y de todos los mapas derivados."""

    def __init__(
        self,
        source: str,
        *,
        settings: AppSettings | None = None,
        collator: Collator | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.source = source
        self._settings = settings
        self._collator = collator or BaseCollator(settings.collation_locale if settings else "es")
        self._client = client
        self._flight: SingleFlight[HierarchyIndex] = SingleFlight()
        self._index = HierarchyIndex()

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Any],
        *,
        collator: Collator | None = None,
    ) -> "HierarchyRepository":
        """Repositorio ya construido desde un feed en memoria; `bootstrap()` no recarga."""

        repository = cls("<memory>", collator=collator)
        repository._index = build_hierarchy(raw, collator=repository._collator, source=repository.source)
        repository._flight.seed(repository.source, repository._index)
        return repository

    @property
    def is_ready(self) -> bool:
        return bool(self._index.departments) or self._flight.is_done(self.source)

    async def bootstrap(self) -> list[Department]:
        """Carga y construye el modelo una sola vez por vida del repositorio.

        Errores de feed (`SourceUnavailable`, `SourceMalformed`) se propagan;
        el repositorio queda sin inicializar y se puede reintentar.
        """

        index = await self._flight.run(self.source, self._load)
        return list(index.departments)

    async def _load(self) -> HierarchyIndex:
        payload = await load_json_source(self.source, client=self._client, settings=self._settings)
        index = build_hierarchy(payload, collator=self._collator, source=self.source)
        self._index = index
        return index

    # -- accesores de solo lectura -------------------------------------------------

    def get_departments(self) -> list[Department]:
        return list(self._index.departments)

    def get_department_by_id(self, department_id: str) -> Department | None:
        return self._index.departments_by_id.get(department_id)

    def get_provinces_by_department(self, department_id: str) -> list[Province]:
        department = self._index.departments_by_id.get(department_id)
        if department is None:
            return []
        return list(department.provinces)

    def get_province_by_id(self, province_id: str) -> Province | None:
        return self._index.provinces_by_id.get(province_id)

    def get_districts_by_province(self, province_id: str) -> list[District]:
        province = self._index.provinces_by_id.get(province_id)
        if province is None:
            return []
        return list(province.districts)

    def lookup_by_primary_code(self, code: object) -> LookupResult | None:
        """Resuelve un código RENIEC (acepta formato irregular: `15-01-22`)."""

        return self._resolve(self._index.districts_by_id.get(normalize_code(code)))

    def lookup_by_alternate_code(self, code: object) -> LookupResult | None:
        """Resuelve un código INEI por el mismo camino que el primario."""

        return self._resolve(self._index.districts_by_alternate_code.get(normalize_code(code)))

    def iter_districts(self):
        """Recorre todos los distritos en el orden canónico del árbol."""

        for department in self._index.departments:
            for province in department.provinces:
                yield from province.districts

    def _resolve(self, district: District | None) -> LookupResult | None:
        if district is None:
            return None
        province = self._index.provinces_by_id.get(district.province_id)
        department = self._index.departments_by_id.get(district.department_id)
        if province is None or department is None:
            logger.debug("District %s has no registered ancestors", district.id)
            return None
        return LookupResult(department=department, province=province, district=district)
