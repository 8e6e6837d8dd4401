"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni archivos: solo departamentos,
  provincias, distritos y filas de catálogo.
"""
