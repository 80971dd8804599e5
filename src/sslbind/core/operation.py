"""Wrapped operation declarations."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Tuple

from .signature import Signature


@dataclass(frozen=True)
class Operation:
    """A wrapped library operation.
    
    Attributes:
        name: Primary symbol name (the reference declaration's name)
        signature: Declared signature
        renames: Older names with equivalent semantics, tried in order
        macro: Some library variants only provide a macro form
        optional: May be absent entirely; `default` is returned instead
        default: Result for an unsupported optional operation
    """
    name: str
    signature: Signature
    renames: Tuple[str, ...] = ()
    macro: bool = False
    optional: bool = False
    default: Any = None
    
    @property
    def chained(self) -> bool:
        """True when resolution goes through a fallback chain."""
        return bool(self.renames) or self.macro
