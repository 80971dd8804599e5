"""Shared library file format loaders.

Reads export tables of ELF, PE and Mach-O images without loading them.
"""
from __future__ import annotations
from .factory import Factory
from .base import Loader, Export

__all__ = ["Factory", "Loader", "Export"]
