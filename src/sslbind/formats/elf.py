"""Linux ELF shared object parsing."""
from __future__ import annotations
import lief
from typing import List
from .base import Loader, Export
from .utils import norm_sym
from ..core.exceptions import ProbeError
from ..utils.logger import log


class ELF(Loader):
    """ELF shared object loader.
    
    Reads the dynamic symbol table, which is what dlsym() searches.
    """
    
    def __init__(self, path: str):
        """Initialize ELF loader.
        
        Args:
            path: Path to ELF file
        """
        super().__init__(path)
        self.bin = None
        
    def parse(self) -> None:
        """Parse ELF file format."""
        log.debug(f"ELF: Loading {self.path}")
        self.bin = lief.ELF.parse(self.path)
        if self.bin is None:
            raise ProbeError(f"Could not parse ELF file: {self.path}")
        
        # DT_SONAME, if present
        for entry in self.bin.dynamic_entries:
            if isinstance(entry, lief.ELF.DynamicSharedObject):
                self.soname = entry.name
                break
        
        log.debug(f"ELF: soname={self.soname}")
    
    def exports(self) -> List[Export]:
        """Get exported functions from the dynamic symbol table.
        
        Returns:
            List of Export records for defined, exported functions
        """
        result = []
        for sym in self.bin.dynamic_symbols:
            if sym.exported and sym.is_function and sym.name and sym.value:
                result.append(Export(norm_sym(sym.name), int(sym.value)))
        return result
