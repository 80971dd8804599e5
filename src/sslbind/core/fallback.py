"""Fallback chains for renamed and macro-only symbols."""
from __future__ import annotations
from typing import Any, Tuple, Union, TYPE_CHECKING

from .exceptions import SignatureError
from .resolver import Function
from .signature import Signature
from ..utils.logger import log

if TYPE_CHECKING:
    from .handle import Handle
    from .router import Router
    from ..stubs.core import Trampoline

Candidate = Union[str, "Trampoline"]


class Chain:
    """Ordered candidates for one logical operation.
    
    Candidates are symbol names or trampolines, tried left to right;
    the first that resolves wins. Symbol candidates go through the
    router's resolver, so each name is looked up at most once.
    """
    
    def __init__(self, name: str, signature: Signature, *candidates: Candidate):
        if not candidates:
            raise SignatureError(f"{name}: empty fallback chain")
        for cand in candidates:
            if not isinstance(cand, str) and cand.signature != signature:
                raise SignatureError(
                    f"{name}: trampoline declared as {cand.signature}, chain as {signature}"
                )
        self.name = name
        self.signature = signature
        self.candidates: Tuple[Candidate, ...] = candidates
    
    def resolve(self, router: 'Router', handle: 'Handle') -> Function:
        """Evaluate the chain against a handle.
        
        Returns:
            First valid Function, or an unresolved one named after the
            operation when no candidate resolves
        """
        for i, cand in enumerate(self.candidates):
            if isinstance(cand, str):
                fn = router.resolver.resolve(handle, cand, self.signature)
            else:
                fn = cand.bind(router, handle)
            if fn:
                if i:
                    log.debug(f"Chain: {self.name} -> {_label(cand)} (candidate {i + 1})")
                return fn
        log.debug(f"Chain: {self.name} unresolved in {handle!r}, tried {self.labels()}")
        return Function(self.name, handle, self.signature)
    
    def labels(self) -> list[str]:
        return [_label(c) for c in self.candidates]
    
    def __repr__(self) -> str:
        return f"Chain({self.name}: {' -> '.join(self.labels())})"


def _label(cand: Any) -> str:
    if isinstance(cand, str):
        return cand
    return f"<trampoline {cand.variant}:{cand.name}>"
