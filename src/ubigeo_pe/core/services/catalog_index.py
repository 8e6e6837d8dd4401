"""Índice cruzado por estándar (RENIEC / INEI) a partir de un catálogo plano.

Cada catálogo es una lista de filas `{departamento, provincia, distrito,
nombre?}` con partes numéricas que no siempre vienen con padding. El índice
resultante se reconcilia con la jerarquía solo al consultar, vía el
`alternate_code` del distrito.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from ubigeo_pe.core.config import AppSettings
from ubigeo_pe.core.domain.models import CatalogRecord, RawCatalogRow
from ubigeo_pe.core.errors import SourceMalformed
from ubigeo_pe.core.normalizers import normalize_code, normalize_name, pad_part
from ubigeo_pe.core.resources_loader import load_json_source
from ubigeo_pe.core.services.single_flight import SingleFlight

logger = logging.getLogger(__name__)

NON_LEAF_DISTRICT_PART = "00"


def build_catalog_index(
    rows: Iterable[Any],
    *,
    source: str = "<memory>",
) -> dict[str, CatalogRecord]:
    """Mapa código normalizado → `CatalogRecord`.

    - Filas con distrito `00` son placeholders de provincia y se omiten.
    - Sin ordenar; un código repetido sobrescribe al anterior.
    - Una fila que no es un objeto se omite (nivel de entrada, no de feed).
    """

    if not isinstance(rows, (list, tuple)):
        raise SourceMalformed(source, f"expected a list of rows, got {type(rows).__name__}")

    records: dict[str, CatalogRecord] = {}
    skipped = 0
    for raw in rows:
        try:
            row = RawCatalogRow.model_validate(raw)
        except ValidationError:
            skipped += 1
            continue

        department_id = pad_part(row.department_part)
        province_part = pad_part(row.province_part)
        district_part = pad_part(row.district_part)
        if district_part == NON_LEAF_DISTRICT_PART:
            skipped += 1
            continue

        code = normalize_code(f"{department_id}{province_part}{district_part}")
        records[code] = CatalogRecord(
            code=code,
            department_id=department_id,
            province_id=f"{department_id}{province_part}",
            district_id=code,
            name=normalize_name(row.name) if row.name else None,
        )

    logger.info("Indexed %d catalog records from %s (%d skipped)", len(records), source, skipped)
    return records


class CatalogIndex:
    """Catálogo de un estándar, cargado una sola vez (single-flight)."""

    def __init__(
        self,
        source: str,
        *,
        label: str = "UBIGEO",
        settings: AppSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.source = source
        self.label = label
        self._settings = settings
        self._client = client
        self._flight: SingleFlight[dict[str, CatalogRecord]] = SingleFlight()
        self._records: dict[str, CatalogRecord] = {}

    @classmethod
    def from_rows(cls, rows: Iterable[Any], *, label: str = "UBIGEO") -> "CatalogIndex":
        """Índice ya construido desde filas en memoria; `bootstrap()` no recarga."""

        index = cls("<memory>", label=label)
        index._records = build_catalog_index(rows, source=index.source)
        index._flight.seed(index.source, index._records)
        return index

    async def bootstrap(self) -> dict[str, CatalogRecord]:
        """Carga el catálogo; llamadas concurrentes comparten la misma carga."""

        return await self._flight.run(self.source, self._load)

    async def _load(self) -> dict[str, CatalogRecord]:
        payload = await load_json_source(self.source, client=self._client, settings=self._settings)
        self._records = build_catalog_index(payload, source=self.source)
        return self._records

    def lookup(self, code: object) -> CatalogRecord | None:
        return self._records.get(normalize_code(code))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: object) -> bool:
        return self.lookup(code) is not None
