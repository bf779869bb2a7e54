"""Registro Bodega: warehouse clock-in/clock-out service."""

__version__ = "1.0.0"
