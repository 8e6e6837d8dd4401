"""Errores del Core.

Por qué una jerarquía propia:
- La CLI (y cualquier otro caller) decide el mensaje al usuario; el Core solo
  distingue *qué* falló.
- Los fallos a nivel de feed se propagan; los de nivel de entrada se reparan
  en silencio (filtro de código cero / sobrescritura).
"""

from __future__ import annotations


class UbigeoError(Exception):
    """Base de todos los errores del paquete."""


class SourceUnavailable(UbigeoError):
    """No se pudo leer/descargar un feed (red, HTTP, filesystem)."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Source unavailable: {source} ({reason})")
        self.source = source
        self.reason = reason


class SourceMalformed(UbigeoError):
    """El feed se leyó pero su forma de primer nivel no es utilizable."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Source malformed: {source} ({reason})")
        self.source = source
        self.reason = reason


class UnknownEntity(UbigeoError):
    """Un id/código no existe en el modelo.

    El repositorio nunca lo lanza (devuelve `None` o `[]`); lo usan
    colaboradores que necesitan que la entidad exista, como el exportador.
    """

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier
