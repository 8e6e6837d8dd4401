"""Estado de la selección en cascada (departamento → provincia → distrito).

Sin UI: solo las reglas de dependencia entre los tres niveles y el resumen
de cinco filas que muestra el formulario.
"""

from __future__ import annotations

from dataclasses import dataclass

from ubigeo_pe.core.domain.models import Department, District, LookupResult, Province
from ubigeo_pe.core.services.repository import HierarchyRepository

PLACEHOLDER = "—"


@dataclass
class CascadeSelection:
    repository: HierarchyRepository
    department_id: str | None = None
    province_id: str | None = None
    district_id: str | None = None

    def select_department(self, department_id: str | None) -> list[Province]:
        """Fija el departamento y limpia los niveles inferiores.

        Devuelve las opciones del siguiente nivel (vacío si no hay departamento).
        """

        self.department_id = department_id or None
        self.province_id = None
        self.district_id = None
        if self.department_id is None:
            return []
        return self.repository.get_provinces_by_department(self.department_id)

    def select_province(self, province_id: str | None) -> list[District]:
        self.province_id = province_id or None
        self.district_id = None
        if self.province_id is None:
            return []
        return self.repository.get_districts_by_province(self.province_id)

    def select_district(self, district_id: str | None) -> None:
        self.district_id = district_id or None

    def apply(self, match: LookupResult) -> None:
        """Selecciona de una vez los tres niveles de un resultado de búsqueda."""

        self.department_id = match.department.id
        self.province_id = match.province.id
        self.district_id = match.district.id

    def reset(self) -> None:
        self.department_id = None
        self.province_id = None
        self.district_id = None

    def current(self) -> tuple[Department | None, Province | None, District | None]:
        department = (
            self.repository.get_department_by_id(self.department_id) if self.department_id else None
        )
        province = self.repository.get_province_by_id(self.province_id) if self.province_id else None
        district = None
        if self.district_id:
            match = self.repository.lookup_by_primary_code(self.district_id)
            district = match.district if match else None
        return department, province, district

    def summary(self) -> list[tuple[str, str]]:
        department, province, district = self.current()
        return [
            ("Departamento", department.name if department else PLACEHOLDER),
            ("Provincia", province.name if province else PLACEHOLDER),
            ("Distrito", district.name if district else PLACEHOLDER),
            ("UBIGEO (RENIEC)", district.id if district else PLACEHOLDER),
            ("UBIGEO (INEI)", (district.alternate_code if district else None) or PLACEHOLDER),
        ]
