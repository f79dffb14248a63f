"""SILO - sports results analytics backend."""

__version__ = "0.1.0"
