"""Declared function signatures for typed symbol binding."""
from __future__ import annotations
import ctypes
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Optional, Tuple

from .exceptions import SignatureError


@dataclass(frozen=True)
class Signature:
    """Reference declaration of a C function.
    
    Mirrors the header prototype of a symbol (return type plus ordered
    parameter types) and produces the matching ctypes prototype, so any
    function shape can be bound without per-function boilerplate.
    
    Attributes:
        restype: ctypes return type, None for void
        argtypes: Ordered ctypes parameter types
    """
    restype: Any
    argtypes: Tuple[Any, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        """Normalize argtypes to a tuple and reject non-ctypes types."""
        object.__setattr__(self, "argtypes", tuple(self.argtypes))
        for t in (self.restype, *self.argtypes):
            if t is not None and not _is_ctype(t):
                raise SignatureError(f"Not a ctypes type: {t!r}")
    
    @cached_property
    def prototype(self):
        """ctypes function pointer type for this declaration."""
        return ctypes.CFUNCTYPE(self.restype, *self.argtypes)
    
    @property
    def arity(self) -> int:
        """Number of declared parameters."""
        return len(self.argtypes)
    
    @property
    def void(self) -> bool:
        """True when the function returns nothing."""
        return self.restype is None
    
    def bind(self, address: int):
        """Cast a raw function address to a callable of this signature.
        
        Args:
            address: Non-zero function address
            
        Returns:
            ctypes function pointer
        """
        if not address:
            raise SignatureError("Cannot bind NULL address")
        return self.prototype(address)
    
    def bind_symbol(self, name: str, lib: ctypes.CDLL):
        """Bind an exported symbol of a loaded library.
        
        Raises:
            AttributeError: If the library does not export the symbol
        """
        return self.prototype((name, lib))
    
    def wrap(self, fn: Callable[..., Any]):
        """Wrap a Python callable as a C function pointer of this signature."""
        return self.prototype(fn)
    
    def check(self, args: Tuple[Any, ...], name: Optional[str] = None) -> None:
        """Verify the argument count for calls that bypass ctypes conversion."""
        if len(args) != self.arity:
            label = name or "function"
            raise TypeError(f"{label}() takes {self.arity} arguments ({len(args)} given)")
    
    def __str__(self) -> str:
        ret = _type_name(self.restype)
        params = ", ".join(_type_name(t) for t in self.argtypes) or "void"
        return f"{ret} ({params})"


def sig(restype: Any, *argtypes: Any) -> Signature:
    """Shorthand for Signature(restype, argtypes)."""
    return Signature(restype, argtypes)


def _is_ctype(t: Any) -> bool:
    return isinstance(t, type) and issubclass(t, (ctypes._SimpleCData, ctypes._Pointer,
                                                  ctypes.Structure, ctypes.Union, ctypes.Array,
                                                  ctypes._CFuncPtr))


def _type_name(t: Any) -> str:
    if t is None:
        return "void"
    return t.__name__
