"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni plataformas: solo conceptos del problema
  (coordenadas, direcciones, estado del flujo y su vocabulario de errores).
"""
