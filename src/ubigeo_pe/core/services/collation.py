"""Colación "base-letter" (sensibilidad `base`).

Mayúsculas y tildes no afectan el orden. Algunos locales tratan una letra
con diacrítico como letra base propia: en español la `ñ` va después de la
`n` ("Nuñoa" < "Ñahuimpuquio" pero "Nz..." < "Ña..."). Esas excepciones viven
en `_TAILORINGS`.
"""

from __future__ import annotations

import unicodedata

from ubigeo_pe.core.interfaces.collation import Collator

# Sufijo que coloca la letra "tailored" después de cualquier secuencia de su base.
_AFTER_BASE = "\U0010ffff"

_TAILORINGS: dict[str, dict[str, str]] = {
    "es": {"ñ": "n" + _AFTER_BASE},
}


class BaseCollator(Collator):
    """Colación insensible a mayúsculas y acentos, parametrizada por locale."""

    def __init__(self, locale: str = "es") -> None:
        self.locale = locale
        language = locale.replace("_", "-").split("-", 1)[0].lower()
        self._tailoring = _TAILORINGS.get(language, {})

    def sort_key(self, value: str) -> str:
        out: list[str] = []
        for ch in unicodedata.normalize("NFC", value or "").casefold():
            tailored = self._tailoring.get(ch)
            if tailored is not None:
                out.append(tailored)
                continue
            for part in unicodedata.normalize("NFD", ch):
                if not unicodedata.combining(part):
                    out.append(part)
        return "".join(out)

    def compare(self, left: str, right: str) -> int:
        a, b = self.sort_key(left), self.sort_key(right)
        return (a > b) - (a < b)

