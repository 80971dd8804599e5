"""Custom exception classes for sslbind."""
from __future__ import annotations


class BindError(Exception):
    """Base class for all symbol binding exceptions."""
    pass


class HandleError(BindError):
    """Raised when a library handle cannot be used for resolution."""
    pass


class HandleLockedError(HandleError):
    """Raised when the handle is changed after bindings were resolved."""
    def __init__(self, current, requested, count: int):
        self.current = current
        self.requested = requested
        self.count = count
        super().__init__(
            f"Cannot switch handle {current!r} -> {requested!r}: "
            f"{count} binding(s) already resolved (call reset() first)"
        )


class SymbolNotFoundError(BindError):
    """Raised when an unresolved mandatory symbol is called."""
    def __init__(self, name: str, handle=None):
        self.name = name
        self.handle = handle
        where = f" in {handle!r}" if handle is not None else ""
        super().__init__(f"Symbol not found{where}: {name}")


class SignatureError(BindError):
    """Raised when a function declaration is invalid or conflicts with a cached one."""
    pass


class ProbeError(BindError):
    """Raised when a library image cannot be inspected."""
    pass
