"""Bootstrap orchestration for the hierarchy and the per-standard catalogs.

The CLI (and any other entry-point: API, batch export, tests) delegates the
wiring of sources to these helpers. The three loads are independent and run
concurrently; each one is single-flight on its own, so calling
`UbigeoContext.bootstrap()` twice never refetches a source.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import httpx

from ubigeo_pe.core.config import AppSettings
from ubigeo_pe.core.services.catalog_index import CatalogIndex
from ubigeo_pe.core.services.collation import BaseCollator
from ubigeo_pe.core.services.repository import HierarchyRepository
from ubigeo_pe.core.services.resolver import CodeResolver, Standard


@dataclass
class UbigeoContext:
    """Repository + catalogs built from one settings object."""

    repository: HierarchyRepository
    catalogs: dict[Standard, CatalogIndex] = field(default_factory=dict)

    @property
    def resolver(self) -> CodeResolver:
        return CodeResolver(self.repository, self.catalogs)

    async def bootstrap(self) -> "UbigeoContext":
        """Load every source concurrently; the first feed failure propagates."""

        await asyncio.gather(
            self.repository.bootstrap(),
            *(catalog.bootstrap() for catalog in self.catalogs.values()),
        )
        return self


def build_context(
    settings: AppSettings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> UbigeoContext:
    settings = settings or AppSettings()
    repository = HierarchyRepository(
        settings.hierarchy_source,
        settings=settings,
        collator=BaseCollator(settings.collation_locale),
        client=client,
    )
    catalogs = {
        Standard.RENIEC: CatalogIndex(
            settings.reniec_catalog_source, label="RENIEC", settings=settings, client=client
        ),
        Standard.INEI: CatalogIndex(
            settings.inei_catalog_source, label="INEI", settings=settings, client=client
        ),
    }
    return UbigeoContext(repository=repository, catalogs=catalogs)
