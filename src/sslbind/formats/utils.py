"""Loader utility functions for export processing."""
from __future__ import annotations
from typing import Any, Iterable, List

from .base import Export
from ..utils.logger import log


def norm_sym(name: str, strip_underscore: bool = False) -> str:
    """Normalize a symbol name as the dynamic linker sees it.
    
    Args:
        name: Raw symbol name from the file
        strip_underscore: Drop the C-level leading underscore (Mach-O)
        
    Returns:
        Name without version suffix or leading underscore
    """
    if not name:
        return ""
    name = name.split("@", 1)[0]
    if strip_underscore and name.startswith("_"):
        name = name[1:]
    return name


def function_exports(functions: Iterable[Any], strip_underscore: bool = False) -> List[Export]:
    """Convert LIEF exported function objects into Export records.
    
    Args:
        functions: Iterable of lief.Function
        strip_underscore: Drop the leading underscore (Mach-O)
    """
    result = []
    try:
        for fn in functions:
            name = norm_sym(fn.name, strip_underscore)
            if name:
                result.append(Export(name, int(fn.address)))
    except (AttributeError, RuntimeError) as e:
        # LIEF may not have exports or they may be malformed
        log.debug(f"function_exports: Could not parse exports: {e}")
    return result
