"""Abstract base class for library image loaders."""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, List, Optional


@dataclass(frozen=True)
class Export:
    """Represents an exported function.
    
    Attributes:
        name: Symbol name as a dynamic linker would look it up
        address: Address relative to the image base
    """
    name: str       # Symbol name
    address: int    # Image-relative address


class Loader(ABC):
    """Abstract base class for shared library loaders.
    
    Loaders only read the file; nothing is mapped or executed.
    """
    
    def __init__(self, path: str):
        """Initialize loader with file path.
        
        Args:
            path: Path to shared library file
        """
        self.path = path
        self.soname: Optional[str] = None
        self._names: Optional[FrozenSet[str]] = None
    
    @abstractmethod
    def parse(self) -> None:
        """Parse the file format."""
        ...
    
    @abstractmethod
    def exports(self) -> List[Export]:
        """Get exported functions.
        
        Returns:
            List of Export records
        """
        ...
    
    def names(self) -> FrozenSet[str]:
        """Names of all exported functions."""
        if self._names is None:
            self._names = frozenset(e.name for e in self.exports())
        return self._names
    
    def has(self, name: str) -> bool:
        """Check whether the image exports a function."""
        return name in self.names()
    
    @property
    def format(self) -> str:
        """Get file format name (ELF, PE, MachO)."""
        return self.__class__.__name__.replace("Loader", "")
