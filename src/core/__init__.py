"""Core de whatis: dominio, contratos y servicios (sin I/O directo)."""

__version__ = "0.2.0"
