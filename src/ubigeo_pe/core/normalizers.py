"""Normalizadores puros de nombres y códigos UBIGEO.

Ambas funciones son totales: nunca lanzan, cualquier entrada produce una
salida (posiblemente vacía o `000000`).
"""

from __future__ import annotations

import re

UBIGEO_WIDTH = 6
ZERO_CODE = "0" * UBIGEO_WIDTH

_WHITESPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"\D", re.ASCII)


def normalize_name(value: str | None = "") -> str:
    """Forma canónica de un nombre: espacios simples, sin bordes, Title Case por palabra.

    No hay lista de excepciones para partículas ("De", "La", ...): cada token
    se capitaliza igual.
    """

    if not value:
        return ""
    tokens = _WHITESPACE_RE.sub(" ", str(value)).strip().lower().split(" ")
    return " ".join(token.capitalize() for token in tokens if token)


def normalize_code(value: object = "") -> str:
    """Código de 6 dígitos: quita lo que no es dígito y rellena con ceros a la izquierda.

    Un residuo de más de 6 dígitos se devuelve tal cual (sin truncar).
    """

    if value is None:
        value = ""
    digits = _NON_DIGIT_RE.sub("", str(value))
    return digits.rjust(UBIGEO_WIDTH, "0")


def normalize_optional_code(value: object) -> str | None:
    """Como `normalize_code`, pero un valor vacío o todo ceros se considera ausente."""

    if value is None or value == "":
        return None
    code = normalize_code(value)
    return None if is_zero_code(code) else code


def is_zero_code(code: str) -> bool:
    return not code.strip("0")


def pad_part(value: object, width: int = 2) -> str:
    """Rellena una parte del código (departamento/provincia/distrito) a `width` dígitos."""

    if value is None:
        value = ""
    return str(value).strip().rjust(width, "0")
