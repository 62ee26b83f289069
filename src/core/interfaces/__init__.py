"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (ubicación, permisos, reverse geocoding).
- Permite invertir dependencias: el `FlowController` depende de abstracciones
  y los tests inyectan fakes deterministas.
"""
