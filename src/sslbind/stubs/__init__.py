"""Trampoline management for macro-only operations.

Provides the trampoline registry and the built-in libssl trampolines.
"""
from __future__ import annotations
from .core import Stubs, Trampoline, register_builtins
from .openssl import register_openssl_stubs, get_builtin_openssl_stubs

__all__ = [
    # Core
    "Stubs", "Trampoline", "register_builtins",
    # Built-in trampolines
    "register_openssl_stubs", "get_builtin_openssl_stubs",
]
