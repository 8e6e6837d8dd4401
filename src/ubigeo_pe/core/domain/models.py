"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de los ids derivados (longitud, prefijos) en el borde
  de construcción, no en cada consulta.
- Modelos congelados (`frozen=True`) con hijos en tuplas: los registros son
  inmutables, así que el repositorio puede entregarlos sin copias profundas.

Nota:
- Estos modelos describen *qué* es una división administrativa, no *cómo* se
  obtiene ni de qué feed sale.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class District(BaseModel):
    """Distrito: hoja de la jerarquía, identificado por su código primario (RENIEC)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        pattern=r"^\d{6,}$",
        description="Código UBIGEO primario (6 dígitos).",
    )
    name: str = Field(..., description="Nombre canónico.")
    province_id: str = Field(..., pattern=r"^\d{4}$")
    department_id: str = Field(..., pattern=r"^\d{2}$")
    alternate_code: str | None = Field(
        default=None,
        description="Código del mismo distrito en el otro estándar (INEI), si se conoce.",
    )
    external_entity_id: Any = Field(
        default=None,
        description="Identificador opaco de la entidad en el feed de origen.",
    )

    @model_validator(mode="after")
    def _check_prefixes(self) -> "District":
        if not self.id.startswith(self.province_id):
            raise ValueError(f"province_id {self.province_id} is not a prefix of {self.id}")
        if not self.province_id.startswith(self.department_id):
            raise ValueError(
                f"department_id {self.department_id} is not a prefix of {self.province_id}"
            )
        return self


class Province(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^\d{4}$")
    name: str
    department_id: str = Field(..., pattern=r"^\d{2}$")
    districts: tuple[District, ...] = Field(..., min_length=1)


class Department(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^\d{2}$")
    name: str
    provinces: tuple[Province, ...] = Field(..., min_length=1)


class CatalogRecord(BaseModel):
    """Fila de un catálogo plano (RENIEC o INEI) ya normalizada."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Código de 6 dígitos en el estándar del catálogo.")
    department_id: str
    province_id: str
    district_id: str
    name: str | None = None


class LookupResult(BaseModel):
    """Resolución completa de un código: distrito y sus ancestros."""

    model_config = ConfigDict(frozen=True)

    department: Department
    province: Province
    district: District


class RawDistrictEntry(BaseModel):
    """Metadata cruda de un distrito en el feed jerárquico.

    Acepta tanto las claves del padrón original (`ubigeo`, `inei`, `id`) como
    las descriptivas (`code`, `alternateCode`, `externalEntityId`).
    """

    model_config = ConfigDict(extra="ignore")

    code: Any = Field(
        default=None,
        validation_alias=AliasChoices("ubigeo", "code"),
    )
    alternate_code: Any = Field(
        default=None,
        validation_alias=AliasChoices("inei", "alternateCode", "alternate_code"),
    )
    external_entity_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("id", "externalEntityId", "external_entity_id"),
    )


class RawCatalogRow(BaseModel):
    """Fila cruda de un catálogo plano (partes numéricas sin padding garantizado)."""

    model_config = ConfigDict(extra="ignore")

    department_part: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("departamento", "departmentPart", "department_part"),
    )
    province_part: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("provincia", "provincePart", "province_part"),
    )
    district_part: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("distrito", "districtPart", "district_part"),
    )
    name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("nombre", "name"),
    )
