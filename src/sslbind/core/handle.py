"""Library handles: which image symbols are looked up in."""
from __future__ import annotations
import ctypes
import os
import sys
from typing import Any, Optional

from .exceptions import HandleError
from .signature import Signature
from ..utils.logger import log


class Handle:
    """An image whose exported symbols can be looked up by name.
    
    Subclasses implement lookup(); everything else is derived from it.
    """
    
    def lookup(self, name: str) -> Optional[int]:
        """Get the address of an exported function.
        
        Args:
            name: Symbol name
            
        Returns:
            Address if exported, None otherwise
        """
        raise NotImplementedError
    
    @property
    def key(self) -> Any:
        """Hashable identity used to key cached bindings."""
        return ("handle", id(self))
    
    def has(self, name: str) -> bool:
        """Check whether the image exports a symbol."""
        return bool(self.lookup(name))
    
    def bind(self, name: str, signature: Signature):
        """Resolve a symbol and cast it to a declared signature.
        
        Returns:
            ctypes function pointer, or None if the symbol is absent
        """
        addr = self.lookup(name)
        if not addr:
            return None
        return signature.bind(addr)


class Library(Handle):
    """Handle for an already opened shared library.
    
    Accepts a ctypes.CDLL or a raw integer handle as returned by dlopen().
    Loading the library is left to the caller.
    """
    
    def __init__(self, ref: Any, name: Optional[str] = None):
        if isinstance(ref, ctypes.CDLL):
            self.lib = ref
        elif isinstance(ref, int) and not isinstance(ref, bool):
            if not ref:
                raise HandleError("NULL library handle")
            self.lib = ctypes.CDLL(name, handle=ref)
        else:
            raise HandleError(f"Unsupported library handle: {type(ref).__name__}")
        self.name = name or getattr(self.lib, "_name", None)
    
    @property
    def key(self) -> Any:
        return ("lib", int(self.lib._handle))
    
    def lookup(self, name: str) -> Optional[int]:
        try:
            fn = self.lib[name]
        except AttributeError:
            return None
        return ctypes.cast(fn, ctypes.c_void_p).value
    
    def bind(self, name: str, signature: Signature):
        try:
            return signature.bind_symbol(name, self.lib)
        except AttributeError:
            return None
    
    @property
    def path(self) -> Optional[str]:
        """Filesystem path of the loaded image, if it can be determined."""
        return image_path(self.name)
    
    def __repr__(self) -> str:
        return f"Library({self.name or hex(self.lib._handle)})"


class Process(Library):
    """The running process's own global symbol table (dlopen(NULL))."""
    
    def __init__(self):
        self._lib = None
        self.name = None
    
    @property
    def lib(self) -> ctypes.CDLL:
        if self._lib is None:
            if os.name == "nt":
                raise HandleError("Process symbol table lookup is not supported on Windows")
            self._lib = ctypes.CDLL(None)
            log.debug("Process: opened global symbol table")
        return self._lib
    
    @property
    def key(self) -> Any:
        return ("process",)
    
    @property
    def path(self) -> Optional[str]:
        return None
    
    def __repr__(self) -> str:
        return "Process()"


class _Default:
    """Sentinel: use symbols already present in the running process."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __repr__(self) -> str:
        return "DEFAULT"
    

DEFAULT = _Default()


def as_handle(value: Any):
    """Normalize a configuration value into DEFAULT or a Handle.
    
    Args:
        value: None/DEFAULT, a Handle, a ctypes.CDLL or a raw dlopen handle.
            A raw 0 is RTLD_DEFAULT and selects the process symbols.
        
    Returns:
        DEFAULT or a Handle instance
        
    Raises:
        HandleError: If the value cannot be used as a handle
    """
    if value is None or value is DEFAULT:
        return DEFAULT
    if isinstance(value, int) and not isinstance(value, bool) and value == 0:
        return DEFAULT
    if isinstance(value, Handle):
        return value
    return Library(value)


def image_path(name: Optional[str]) -> Optional[str]:
    """Find the file backing a loaded library name.
    
    Absolute names are returned as is. Bare sonames are matched against
    the mappings of the current process (Linux only).
    """
    if not name:
        return None
    if os.path.isabs(name):
        return name
    if not sys.platform.startswith("linux"):
        return None
    try:
        with open("/proc/self/maps") as f:
            for line in f:
                parts = line.split(None, 5)
                if len(parts) == 6:
                    path = parts[5].strip()
                    if os.path.basename(path) == name:
                        return path
    except OSError as e:
        log.debug(f"image_path: cannot read process mappings: {e}")
    return None
