"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan estrategias concretas.
- Permite cambiar la colación sin tocar la construcción del árbol.
"""
