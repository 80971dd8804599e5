"""Core trampoline management for macro-only operations."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from ..core.resolver import Function
from ..core.signature import Signature
from ..types import TrampolineCallback
from ..utils.constants import Variant
from ..utils.logger import log

if TYPE_CHECKING:
    from ..core.handle import Handle
    from ..core.router import Router


@dataclass(frozen=True)
class Trampoline:
    """Local stand-in for an operation that has no exported symbol.
    
    The callback receives the router first so it can forward to the
    symbols the macro expands to, against whatever image the router
    currently targets.
    
    Attributes:
        name: Operation name the trampoline stands in for
        variant: Library family it expands the macro for
        signature: Declared signature, identical to the operation's
        callback: Implementation, (router, *args) -> retval
    """
    name: str
    variant: str
    signature: Signature
    callback: TrampolineCallback
    
    def bind(self, router: 'Router', handle: 'Handle') -> Function:
        """Bind the trampoline to a router as a Function."""
        sig = self.signature
        cb = self.callback
        name = self.name
        
        def call(*args):
            sig.check(args, name)
            return cb(router, *args)
        
        return Function(self.name, handle, self.signature, call, source="trampoline")


class Stubs:
    """Registry of trampolines keyed by (variant, name).
    
    Lookups for a variant without its own trampoline fall back to the
    OpenSSL family, which covers every versioned OpenSSL variant.
    """
    
    def __init__(self) -> None:
        self._stubs: Dict[Tuple[str, str], Trampoline] = {}
    
    def register(self, variant: str, name: str, signature: Signature,
                 callback: TrampolineCallback) -> Trampoline:
        """Register a trampoline.
        
        Args:
            variant: Library family (see Variant)
            name: Operation name
            signature: Declared signature of the operation
            callback: Implementation, (router, *args) -> retval
            
        Returns:
            The registered Trampoline
        """
        tramp = Trampoline(name, variant, signature, callback)
        self._stubs[(variant, name)] = tramp
        log.debug(f"Stubs: registered {variant}:{name}")
        return tramp
    
    def get(self, variant: str, name: str) -> Optional[Trampoline]:
        """Get the trampoline for an operation in a library variant."""
        family = Variant.family(variant)
        if tramp := self._stubs.get((family, name)):
            return tramp
        return self._stubs.get((Variant.OPENSSL, name))


def register_builtins(stubs: Stubs, builtins: dict, selection: list[str] | None = None) -> None:
    """Register built-in trampolines from a dictionary.
    
    Args:
        stubs: Stubs registry
        builtins: Dictionary mapping (variant, name) to (signature, callback)
        selection: Optional list of operation names to register.
                  If None, registers all available trampolines.
    """
    for (variant, name), (signature, callback) in builtins.items():
        if selection is None or name in selection:
            stubs.register(variant, name, signature, callback)
