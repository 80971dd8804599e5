"""Lazy, memoized symbol resolution."""
from __future__ import annotations
import ctypes
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from .exceptions import SignatureError, SymbolNotFoundError
from .handle import Handle
from .signature import Signature
from ..types import BindingKey
from ..utils.logger import log

_UNSET = object()


class Function:
    """Typed callable bound to a resolved symbol.
    
    A Function is falsy when resolution failed; calling it in that state
    raises SymbolNotFoundError. Arguments and return values are converted
    by the declared signature and otherwise passed through unchanged.
    
    Attributes:
        name: Symbol name
        handle: Handle the symbol was resolved against
        signature: Declared signature
        source: 'symbol', 'trampoline' or None when unresolved
    """
    
    def __init__(self, name: str, handle: Any, signature: Signature,
                 fn: Optional[Callable[..., Any]] = None, source: Optional[str] = None):
        self.name = name
        self.handle = handle
        self.signature = signature
        self._fn = fn
        self.source = source if fn is not None else None
    
    @property
    def valid(self) -> bool:
        return self._fn is not None
    
    def __bool__(self) -> bool:
        return self.valid
    
    @property
    def address(self) -> Optional[int]:
        """Resolved address, None for trampolines and unresolved symbols."""
        if self.source != "symbol":
            return None
        return ctypes.cast(self._fn, ctypes.c_void_p).value
    
    def __call__(self, *args):
        if self._fn is None:
            raise SymbolNotFoundError(self.name, self.handle)
        return self._fn(*args)
    
    def __repr__(self) -> str:
        state = self.source or "unresolved"
        return f"<Function {self.name} {self.signature} [{state}] @ {self.handle!r}>"


class Cell:
    """One-time initialized value.
    
    The first get() runs the factory under the cell's lock; concurrent
    callers block until it finishes and all observe the same value.
    Later reads take no lock. A factory that raises leaves the cell empty.
    """
    
    def __init__(self, factory: Callable[[], Any]):
        self._factory = factory
        self._lock = threading.Lock()
        self._value = _UNSET
    
    @property
    def ready(self) -> bool:
        return self._value is not _UNSET
    
    def get(self) -> Any:
        value = self._value
        if value is _UNSET:
            with self._lock:
                if self._value is _UNSET:
                    self._value = self._factory()
                value = self._value
        return value
    
    def peek(self) -> Optional[Any]:
        """Get the value without initializing, None if not ready."""
        value = self._value
        return None if value is _UNSET else value


class Resolver:
    """Symbol resolver with one binding per (handle, name).
    
    The address lookup for a given key runs exactly once; every later
    resolve() returns the identical Function, including unresolved ones.
    """
    
    def __init__(self) -> None:
        self._cells: Dict[BindingKey, Tuple[Signature, Cell]] = {}
        self._lock = threading.Lock()
        self.lookups = 0  # Address lookups performed
    
    def resolve(self, handle: Handle, name: str, signature: Signature) -> Function:
        """Resolve a symbol against a handle.
        
        Args:
            handle: Image to look the symbol up in
            name: Non-empty symbol name
            signature: Declared reference signature
            
        Returns:
            Cached Function, falsy if the symbol is absent
            
        Raises:
            SignatureError: Empty name, or a different signature than the
                one the symbol was first resolved with
        """
        if not isinstance(name, str) or not name:
            raise SignatureError(f"Invalid symbol name: {name!r}")
        key = (handle.key, name)
        entry = self._cells.get(key)
        if entry is None:
            with self._lock:
                entry = self._cells.get(key)
                if entry is None:
                    entry = (signature, Cell(lambda: self._lookup(handle, name, signature)))
                    self._cells[key] = entry
        declared, cell = entry
        if declared != signature:
            raise SignatureError(
                f"{name}: declared as {declared}, requested as {signature}"
            )
        return cell.get()
    
    def _lookup(self, handle: Handle, name: str, signature: Signature) -> Function:
        with self._lock:
            self.lookups += 1
        fn = handle.bind(name, signature)
        if fn is None:
            log.debug(f"Resolver: {name} not found in {handle!r}")
            return Function(name, handle, signature)
        log.debug(f"Resolver: bound {name} {signature} in {handle!r}")
        return Function(name, handle, signature, fn, source="symbol")
    
    def cached(self, handle: Handle, name: str) -> Optional[Function]:
        """Get a binding if it was already resolved, without resolving it."""
        entry = self._cells.get((handle.key, name))
        return entry[1].peek() if entry else None
    
    def bindings(self) -> List[Function]:
        """Get all resolved bindings, valid or not."""
        with self._lock:
            cells = [cell for _, cell in self._cells.values()]
        return [f for f in (c.peek() for c in cells) if f is not None]
    
    def clear(self) -> None:
        """Forget every binding."""
        with self._lock:
            self._cells.clear()
        log.debug("Resolver: cleared bindings")
    
    def __len__(self) -> int:
        return len(self.bindings())
