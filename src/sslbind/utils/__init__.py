"""Utility modules: logger and libssl constants."""
from __future__ import annotations
from .logger import log, Logger

__all__ = ["log", "Logger"]
