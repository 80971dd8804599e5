"""Capability probing for libssl images.

Answers which library variant a handle or file is, and how each wrapped
operation would be served by it, either at runtime through a handle or
statically from a library file's export table.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .core.handle import DEFAULT, Handle, Process, as_handle
from .utils.constants import Marker, Variant
from .utils.logger import log

# How an operation is served
SYMBOL = "symbol"
FALLBACK = "fallback"
TRAMPOLINE = "trampoline"
DEFAULT_VALUE = "default"
MISSING = "missing"


def classify(has: Callable[[str], bool]) -> str:
    """Decide the library variant from marker symbols.

    Args:
        has: Predicate telling whether a symbol is exported

    Returns:
        One of the Variant names
    """
    if not has(Marker.LIBSSL):
        return Variant.UNKNOWN
    if has(Marker.BORINGSSL):
        return Variant.BORINGSSL
    if has(Marker.OPENSSL_3):
        return Variant.OPENSSL_3
    if has(Marker.OPENSSL_1_1):
        return Variant.OPENSSL_1_1
    if has(Marker.OPENSSL_1_0):
        return Variant.OPENSSL_1_0
    return Variant.UNKNOWN


def variant(handle=DEFAULT) -> str:
    """Variant of the library behind a handle (DEFAULT probes the process)."""
    h = as_handle(handle)
    if h is DEFAULT:
        h = Process()
    return classify(h.has)


def serve(op, has: Callable[[str], bool]) -> str:
    """How an operation would be served by an image.

    Returns:
        'symbol', 'fallback:<name>', 'trampoline', 'default' or 'missing'
    """
    from .openssl.decls import MACROS
    if has(op.name):
        return SYMBOL
    for alt in op.renames:
        if has(alt):
            return f"{FALLBACK}:{alt}"
    if op.macro and has(MACROS[op.name]):
        return TRAMPOLINE
    if op.optional:
        return DEFAULT_VALUE
    return MISSING


def capabilities(handle=DEFAULT) -> Dict[str, str]:
    """Map every wrapped operation to how the handle serves it."""
    from .openssl.decls import OPERATIONS
    h = as_handle(handle)
    if h is DEFAULT:
        h = Process()
    return {name: serve(op, h.has) for name, op in OPERATIONS.items()}


@dataclass
class Report:
    """Static inspection result for a library file.

    Attributes:
        path: Inspected file
        format: ELF, PE or MachO
        soname: Library's own name, if recorded
        variant: Detected variant
        exports: Number of exported functions
        operations: Operation name -> how it is served
    """
    path: str
    format: str
    soname: Optional[str]
    variant: str
    exports: int
    operations: Dict[str, str] = field(default_factory=dict)

    @property
    def missing(self) -> List[str]:
        """Operations the library cannot serve."""
        return sorted(n for n, how in self.operations.items() if how == MISSING)

    @property
    def usable(self) -> bool:
        """True when every wrapped operation can be served."""
        return not self.missing


def inspect(path: str) -> Report:
    """Inspect a library file without loading it.

    Args:
        path: Path to a libssl shared library

    Returns:
        Report of variant and per-operation availability

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProbeError: If the file is not a supported library image
    """
    from .formats import Factory
    from .openssl.decls import OPERATIONS
    loader = Factory.create(path)
    names = loader.names()
    report = Report(
        path=path,
        format=loader.format,
        soname=loader.soname,
        variant=classify(loader.has),
        exports=len(names),
        operations={name: serve(op, loader.has) for name, op in OPERATIONS.items()},
    )
    log.debug(f"inspect: {path} is {report.variant}, missing={report.missing}")
    return report


def inspect_handle(handle: Handle) -> Optional[Report]:
    """Inspect the file behind an already loaded library handle.

    Returns:
        Report, or None when the file cannot be located
    """
    path = getattr(handle, "path", None)
    if not path:
        log.debug(f"inspect_handle: no file for {handle!r}")
        return None
    return inspect(path)
