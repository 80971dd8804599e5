"""Core binding components.

Handles, declared signatures, the memoized resolver, fallback chains
and the dispatch router.
"""
from __future__ import annotations
from .exceptions import (
    BindError, HandleError, HandleLockedError,
    SymbolNotFoundError, SignatureError, ProbeError
)
from .signature import Signature, sig
from .handle import Handle, Library, Process, DEFAULT, as_handle
from .resolver import Function, Cell, Resolver
from .operation import Operation
from .fallback import Chain
from .router import Router

__all__ = [
    "BindError", "HandleError", "HandleLockedError",
    "SymbolNotFoundError", "SignatureError", "ProbeError",
    "Signature", "sig",
    "Handle", "Library", "Process", "DEFAULT", "as_handle",
    "Function", "Cell", "Resolver",
    "Operation", "Chain", "Router",
]
