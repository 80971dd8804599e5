"""sslbind: call libssl through in-process or runtime-resolved symbols.

By default the wrapped operations call the symbols already present in
the running process. After configure(handle) they are resolved once
from the given library handle, with fallbacks for renamed symbols and
trampolines for operations some libraries only provide as macros.
"""
from __future__ import annotations
from .core import (
    BindError, HandleError, HandleLockedError,
    SymbolNotFoundError, SignatureError, ProbeError,
    Signature, sig, Handle, Library, Process, DEFAULT,
    Function, Resolver, Operation, Chain, Router,
)
from .openssl import *  # noqa: F401,F403
from .openssl import __all__ as _openssl_all
from .stubs import Stubs, Trampoline
from .utils.logger import log
from . import probe

__version__ = "0.1.0"

__all__ = [
    "BindError", "HandleError", "HandleLockedError",
    "SymbolNotFoundError", "SignatureError", "ProbeError",
    "Signature", "sig", "Handle", "Library", "Process", "DEFAULT",
    "Function", "Resolver", "Operation", "Chain", "Router",
    "Stubs", "Trampoline", "log", "probe",
    *_openssl_all,
]
