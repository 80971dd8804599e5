"""Common type aliases for sslbind.

Provides consistent type hints across the codebase.
"""
from __future__ import annotations
from typing import Callable, Any, Optional, Tuple

# Addresses and opaque libssl objects (passed as integers)
Ptr = Optional[int]  # Pointer value, None for NULL

# Symbols
SymbolName = str  # Exported function name

# Binding keys
HandleKey = Any  # Hashable identity of a handle
BindingKey = Tuple[HandleKey, SymbolName]

# Callbacks
TrampolineCallback = Callable[..., Any]  # (router, *args) -> retval
ErrorCallback = Callable[[bytes, int, Any], int]  # (str, len, u) -> int

__all__ = [
    "Ptr",
    "SymbolName",
    "HandleKey", "BindingKey",
    "TrampolineCallback", "ErrorCallback",
]
