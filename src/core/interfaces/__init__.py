"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores de cada fuente.
- El pipeline depende de abstracciones y los tests usan fakes en memoria.
"""
