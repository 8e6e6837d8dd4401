"""Resolución de un código escrito por el usuario contra un estándar.

Flujo (mismo que el buscador del formulario, sin UI):
1. El input, sin lo que no es dígito, debe tener exactamente 6 dígitos.
2. El código debe existir en el catálogo del estándar elegido.
3. El código del catálogo se resuelve en la jerarquía: RENIEC por código
   primario, INEI por código alterno.

El resultado lleva un estado y, si aplica, el `LookupResult`. Los mensajes
para el usuario se generan aparte (`Resolution.message`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ubigeo_pe.core.domain.language import Language
from ubigeo_pe.core.domain.models import CatalogRecord, LookupResult
from ubigeo_pe.core.services.catalog_index import CatalogIndex
from ubigeo_pe.core.services.repository import HierarchyRepository

_NON_DIGIT_RE = re.compile(r"\D", re.ASCII)


class Standard(str, Enum):
    RENIEC = "reniec"
    INEI = "inei"


class ResolutionStatus(str, Enum):
    EMPTY_INPUT = "empty_input"
    INVALID_LENGTH = "invalid_length"
    NOT_IN_CATALOG = "not_in_catalog"
    NOT_SYNCHRONIZED = "not_synchronized"
    FOUND = "found"


_MESSAGES: dict[Language, dict[ResolutionStatus, str]] = {
    Language.SPANISH: {
        ResolutionStatus.EMPTY_INPUT: "Ingresa un código UBIGEO para buscar.",
        ResolutionStatus.INVALID_LENGTH: "El código UBIGEO debe tener 6 dígitos.",
        ResolutionStatus.NOT_IN_CATALOG: "No encontramos ese código {label}.",
        ResolutionStatus.NOT_SYNCHRONIZED: "El código {label} no está sincronizado con el padrón base.",
        ResolutionStatus.FOUND: "Encontrado ({label}): {department} / {province} / {district}",
    },
    Language.ENGLISH: {
        ResolutionStatus.EMPTY_INPUT: "Enter a UBIGEO code to search.",
        ResolutionStatus.INVALID_LENGTH: "A UBIGEO code must have 6 digits.",
        ResolutionStatus.NOT_IN_CATALOG: "No {label} code matches that value.",
        ResolutionStatus.NOT_SYNCHRONIZED: "The {label} code is not synchronized with the base registry.",
        ResolutionStatus.FOUND: "Found ({label}): {department} / {province} / {district}",
    },
}


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    standard: Standard
    catalog_record: CatalogRecord | None = None
    match: LookupResult | None = None

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND

    def message(self, language: Language = Language.SPANISH) -> str:
        template = _MESSAGES[language][self.status]
        values = {"label": self.standard.value.upper()}
        if self.match is not None:
            values.update(
                department=self.match.department.name,
                province=self.match.province.name,
                district=self.match.district.name,
            )
        return template.format(**values)


class CodeResolver:
    """Cruza los catálogos por estándar con la jerarquía canónica."""

    def __init__(
        self,
        repository: HierarchyRepository,
        catalogs: dict[Standard, CatalogIndex],
    ) -> None:
        self._repository = repository
        self._catalogs = catalogs

    def resolve(self, raw_code: str, standard: Standard = Standard.RENIEC) -> Resolution:
        value = (raw_code or "").strip()
        if not value:
            return Resolution(ResolutionStatus.EMPTY_INPUT, standard)

        digits = _NON_DIGIT_RE.sub("", value)
        if len(digits) != 6:
            return Resolution(ResolutionStatus.INVALID_LENGTH, standard)

        record = self._catalogs[standard].lookup(digits)
        if record is None:
            return Resolution(ResolutionStatus.NOT_IN_CATALOG, standard)

        if standard is Standard.INEI:
            match = self._repository.lookup_by_alternate_code(record.code)
        else:
            match = self._repository.lookup_by_primary_code(record.code)
        if match is None:
            return Resolution(ResolutionStatus.NOT_SYNCHRONIZED, standard, catalog_record=record)

        return Resolution(ResolutionStatus.FOUND, standard, catalog_record=record, match=match)
