"""Contrato de colación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El builder solo pide una `sort_key`; la estrategia (base-letter, ICU, etc.)
  se puede sustituir sin tocar la construcción de la jerarquía.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Collator(Protocol):
    """Contrato mínimo para ordenar nombres.

    Reglas de diseño:
    - `sort_key` es síncrona y total (nunca lanza).
    - Dos nombres que solo difieren en mayúsculas o tildes comparan igual.
    """

    locale: str

    def sort_key(self, value: str) -> str:
        """Clave de ordenación para `value` según la colación del locale."""

        ...
