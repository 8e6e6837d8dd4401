"""ubigeo-pe: jerarquía UBIGEO normalizada (RENIEC / INEI)."""

__version__ = "0.1.0"
