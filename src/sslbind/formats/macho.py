"""macOS Mach-O dylib parsing."""
from __future__ import annotations
import lief
from typing import List
from .base import Loader, Export
from .utils import function_exports
from ..core.exceptions import ProbeError
from ..utils.logger import log


class MachO(Loader):
    """Mach-O dylib loader.
    
    Fat binaries are reduced to their first slice. Exported names lose
    their leading underscore so they match what dlsym() is asked for.
    """
    
    def __init__(self, path: str):
        super().__init__(path)
        self.bin = None
        
    def parse(self) -> None:
        """Parse Mach-O file format."""
        log.debug(f"MachO: Loading {self.path}")
        fat = lief.MachO.parse(self.path)
        if fat is None or fat.size == 0:
            raise ProbeError(f"Could not parse Mach-O file: {self.path}")
        self.bin = fat.at(0)
        
        if self.bin.has_id_dylib:
            self.soname = self.bin.id_dylib.name
        
        log.debug(f"MachO: id={self.soname}")
    
    def exports(self) -> List[Export]:
        """Get exported functions from the export trie."""
        return function_exports(self.bin.exported_functions, strip_underscore=True)
