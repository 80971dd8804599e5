"""Per-call dispatch between the process image and a configured handle."""
from __future__ import annotations
import threading
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .exceptions import HandleLockedError, SymbolNotFoundError
from .fallback import Chain
from .handle import DEFAULT, Handle, Process, as_handle
from .operation import Operation
from .resolver import Function, Resolver
from .signature import Signature
from ..utils.logger import log

if TYPE_CHECKING:
    from ..stubs.core import Stubs


class Router:
    """Dispatches wrapped operations.
    
    With the DEFAULT handle, plain operations call the process's own
    symbols directly and macro-only operations go through the trampoline
    for the process's library variant. With an explicit handle every
    operation is resolved once through the resolver (and its fallback
    chain) and then called with the caller's arguments.
    
    The handle is meant to be configured once before first use. Changing
    it after bindings exist raises HandleLockedError; reset() forgets
    all bindings for a deliberate switch.
    """
    
    def __init__(self, handle: Any = DEFAULT, process: Optional[Handle] = None,
                 stubs: Optional["Stubs"] = None, resolver: Optional[Resolver] = None):
        self.handle = as_handle(handle)
        self.process = process if process is not None else Process()
        if stubs is None:
            from ..stubs import Stubs, register_openssl_stubs
            stubs = register_openssl_stubs(Stubs())
        self.stubs = stubs
        self.resolver = resolver if resolver is not None else Resolver()
        self._direct: Dict[str, Callable[..., Any]] = {}
        self._chains: Dict[Tuple[Any, str], Function] = {}
        self._variants: Dict[Any, str] = {}
        self._lock = threading.RLock()
    
    @property
    def default(self) -> bool:
        """True when the process's own symbols are used."""
        return self.handle is DEFAULT
    
    @property
    def image(self) -> Handle:
        """Handle that symbols are currently looked up in."""
        return self.process if self.default else self.handle
    
    def configure(self, handle: Any) -> None:
        """Install the library handle.
        
        Args:
            handle: DEFAULT/None, a Handle, a ctypes.CDLL or a raw dlopen handle
            
        Raises:
            HandleLockedError: If a different handle is requested after
                bindings were resolved
        """
        new = as_handle(handle)
        if _same(new, self.handle):
            return
        count = self.bound()
        if count:
            raise HandleLockedError(self.handle, new, count)
        log.debug(f"Router: handle {self.handle!r} -> {new!r}")
        self.handle = new
    
    def reset(self, handle: Any = None) -> None:
        """Forget every binding and install a new handle (DEFAULT if None)."""
        with self._lock:
            self.resolver.clear()
            self._chains.clear()
            self._variants.clear()
            self._direct.clear()
            self.handle = as_handle(handle)
        log.debug(f"Router: reset, handle={self.handle!r}")
    
    def bound(self) -> int:
        """Number of bindings resolved so far, in either mode."""
        return len(self.resolver) + len(self._chains) + len(self._direct)
    
    def call(self, op: Operation, *args):
        """Invoke an operation with the caller's arguments.
        
        Returns:
            The library's return value, unchanged; op.default for an
            unsupported optional operation
        """
        if self.default and not (op.macro or op.optional):
            return self.direct(op.name, op.signature)(*args)
        fn = self.function(op)
        if not fn and op.optional:
            log.info(f"Router: {op.name} unsupported by {self.image!r}, returning {op.default!r}")
            return op.default
        return fn(*args)
    
    def direct(self, name: str, signature: Signature) -> Callable[..., Any]:
        """Process-linked symbol, bound without going through the resolver.
        
        Raises:
            SymbolNotFoundError: If the process does not provide the symbol
        """
        fn = self._direct.get(name)
        if fn is None:
            fn = self.process.bind(name, signature)
            if fn is None:
                raise SymbolNotFoundError(name, self.process)
            self._direct[name] = fn
        return fn
    
    def symbol(self, name: str, signature: Signature) -> Callable[..., Any]:
        """Callable for a raw symbol in the current image."""
        if self.default:
            return self.direct(name, signature)
        return self.resolver.resolve(self.handle, name, signature)
    
    def function(self, op: Operation) -> Function:
        """Resolve an operation against the current image.
        
        Plain operations map to a single resolver binding. Chained ones
        are memoized once a candidate resolves; an unresolved chain is
        evaluated again on the next request.
        """
        image = self.image
        if not op.chained:
            return self.resolver.resolve(image, op.name, op.signature)
        key = (image.key, op.name)
        fn = self._chains.get(key)
        if fn is None:
            with self._lock:
                fn = self._chains.get(key)
                if fn is None:
                    fn = self.chain(op).resolve(self, image)
                    if fn:
                        self._chains[key] = fn
        return fn
    
    def chain(self, op: Operation) -> Chain:
        """Build the fallback chain for an operation in the current mode."""
        tramp = self.stubs.get(self.variant(), op.name) if op.macro else None
        if self.default:
            cands = (tramp,) if tramp else (op.name,)
        else:
            cands = (op.name, *op.renames) + ((tramp,) if tramp else ())
        return Chain(op.name, op.signature, *cands)
    
    def variant(self) -> str:
        """Library variant of the current image, probed once per image."""
        from ..probe import variant
        image = self.image
        with self._lock:
            found = self._variants.get(image.key)
            if found is None:
                found = variant(image)
                self._variants[image.key] = found
                log.debug(f"Router: {image!r} is {found}")
        return found
    
    def __repr__(self) -> str:
        return f"Router(handle={self.handle!r}, bound={self.bound()})"


def _same(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if isinstance(a, Handle) and isinstance(b, Handle):
        return a.key == b.key
    return False
